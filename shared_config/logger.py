"""
구조체 분석기 공용 로거 (loguru)

- 콘솔: 컬러 출력, file.path:line 형식이라 에디터에서 바로 이동 가능
- 파일: app.log 에 전체, analysis.log / generate.log 에 단계별 레코드

단계는 logger.bind(phase=...) 로 구분하며, 바인딩하지 않은 레코드는 "app" 입니다.
"""
import sys
import time
from pathlib import Path
from typing import List, Optional

from loguru import logger

ANALYSIS_PHASE = "analysis"
GENERATE_PHASE = "generate"
DEFAULT_PHASE = "app"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<cyan>{file.path}</cyan>:<cyan>{line}</cyan> in <cyan>{function}()</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <7} | "
    "{extra[phase]: <8} | "
    "{file.path}:{line} in {function}() | "
    "{message}"
)

# loguru 기본 stderr 핸들러를 교체
logger.remove()
logger.configure(extra={"phase": DEFAULT_PHASE})

_console_handler_id: Optional[int] = None
_file_handler_ids: List[int] = []


def set_console_level(level: str = "INFO") -> int:
    """콘솔 핸들러를 주어진 레벨로 다시 등록하고 새 핸들러 ID 반환"""
    global _console_handler_id
    if _console_handler_id is not None:
        logger.remove(_console_handler_id)
    _console_handler_id = logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level.upper(),
        colorize=True,
    )
    return _console_handler_id


set_console_level()


def _only_phase(phase: str):
    return lambda record: record["extra"].get("phase") == phase


def _add_file_sink(path: Path, level: str, rotation: str, retention: str, phase: Optional[str] = None) -> int:
    return logger.add(
        str(path),
        format=FILE_FORMAT,
        level=level.upper(),
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
        filter=_only_phase(phase) if phase else None,
    )


def setup_file_logging(
    log_dir: str = "./logs",
    level: str = "DEBUG",
    rotation: str = "10 MB",
    retention: str = "7 days"
) -> List[int]:
    """
    로그 파일 핸들러 등록

    다시 호출하면 이전에 등록한 파일 핸들러를 먼저 제거합니다.

    Args:
        log_dir: 로그 파일을 둘 디렉토리
        level: 파일에 기록할 최소 레벨
        rotation: 파일 교체 기준 (loguru rotation 값)
        retention: 지난 파일 보관 기준 (loguru retention 값)

    Returns:
        등록된 핸들러 ID 목록 (app, analysis, generate 순)
    """
    while _file_handler_ids:
        logger.remove(_file_handler_ids.pop())

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    _file_handler_ids.append(_add_file_sink(directory / "app.log", level, rotation, retention))
    for phase in (ANALYSIS_PHASE, GENERATE_PHASE):
        _file_handler_ids.append(
            _add_file_sink(directory / f"{phase}.log", level, rotation, retention, phase)
        )

    logger.info(f"로그 디렉토리: {directory}")
    return list(_file_handler_ids)


def get_logger(phase: Optional[str] = None):
    """
    단계가 바인딩된 로거

    Example:
        log = get_logger(ANALYSIS_PHASE)
        log.info("분석 시작")   # app.log 와 analysis.log 에 기록
    """
    return logger.bind(phase=phase) if phase else logger


class LogStage:
    """
    파이프라인 단계의 시작/완료/실패와 소요 시간 기록

    Example:
        with LogStage("구조체 분석", log=get_logger(ANALYSIS_PHASE), root="./src"):
            scanner.scan()
    """

    def __init__(self, stage_name: str, log=None, **context):
        self.stage_name = stage_name
        self.log = log or logger
        self.context = context
        self._started = 0.0

    def __enter__(self):
        detail = ", ".join(f"{key}={value}" for key, value in self.context.items())
        self.log.info(f"[시작] {self.stage_name}" + (f" ({detail})" if detail else ""))
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self._started
        if exc_type is not None:
            self.log.error(f"[실패] {self.stage_name}: {exc_val} ({elapsed:.2f}s)")
        else:
            self.log.success(f"[완료] {self.stage_name} ({elapsed:.2f}s)")
        return False


__all__ = [
    "logger",
    "get_logger",
    "set_console_level",
    "setup_file_logging",
    "LogStage",
    "ANALYSIS_PHASE",
    "GENERATE_PHASE",
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
]
