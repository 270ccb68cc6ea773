"""
오류 정의 및 오류 기록 모듈

치명적 오류는 예외로, 부분 실패는 ErrorSink에 기록하고 실행을 계속합니다.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from shared_config.logger import logger


class SourceRootError(Exception):
    """소스 루트를 읽을 수 없음 (실행 중단)"""


class SourceReadError(OSError):
    """소스 파일 읽기/디코딩 실패 (해당 파일만 건너뜀)"""


class SourceDecodeError(SourceReadError):
    """기본/대체 인코딩 모두 디코딩 실패"""


class ReportError(Exception):
    """분석 보고서를 읽을 수 없거나 형식이 잘못됨"""


class ErrorKind(Enum):
    """오류 종류"""
    DECODE = "decode"
    IO = "io"
    MALFORMED_DECLARATION = "malformed_declaration"
    UNMATCHED_BRACES = "unmatched_braces"
    MISSING_BODY = "missing_body"
    NO_FIELDS = "no_fields"


@dataclass
class ErrorRecord:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class ErrorSink:
    """
    추가 전용 오류 채널

    기록된 오류는 메모리에 보관되고, 경로가 주어지면 파일에도 한 줄씩 추가됩니다.
    파일 쓰기 실패는 로그만 남기고 실행을 막지 않습니다.

    사용 예:
        sink = ErrorSink(Path("SAOut/errors.txt"), truncate=True)
        sink.record(ErrorKind.IO, "IO Error processing a.c: ...")
    """

    def __init__(self, path: Optional[Path] = None, truncate: bool = False):
        self.path = Path(path) if path else None
        self.records: List[ErrorRecord] = []
        if self.path and truncate:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("", encoding="utf-8")
            except OSError as e:
                logger.error(f"오류 파일 초기화 실패: {self.path}: {e}")

    def record(self, kind: ErrorKind, message: str) -> ErrorRecord:
        error = ErrorRecord(kind, message)
        self.records.append(error)
        if self.path:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(str(error) + "\n")
            except OSError as e:
                logger.error(f"오류 파일 기록 실패: {self.path}: {e}")
        return error

    def of_kind(self, kind: ErrorKind) -> List[ErrorRecord]:
        return [r for r in self.records if r.kind is kind]

    @property
    def lines(self) -> List[str]:
        return [str(r) for r in self.records]

    def __len__(self) -> int:
        return len(self.records)
