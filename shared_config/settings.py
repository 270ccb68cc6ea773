"""
실행 설정 모듈

YAML 설정 파일을 Settings 데이터 클래스로 로드합니다.

설정 파일 예시:
    source_root: ./legacy/src
    include_patterns: ["*.c", "*.h"]
    exclude_patterns: ["test/*"]
    output_dir: ./SAOut
    top_n: 5
"""
import codecs
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .logger import logger


class ConfigError(ValueError):
    """설정 파일 오류"""


@dataclass
class Settings:
    """구조체 분석/생성 설정"""

    # 분석 대상
    source_root: str = ""
    include_patterns: List[str] = field(default_factory=lambda: ["*.c", "*.h"])
    exclude_patterns: List[str] = field(default_factory=list)

    # 인코딩 설정
    primary_encoding: str = "utf-8"
    fallback_encoding: str = "latin-1"

    # 주석 제거 후에도 원본 라인 번호 유지 (False면 기존 보고서와 동일한 계산)
    preserve_line_numbers: bool = True

    # 출력 설정 (output_dir 기준 상대 경로)
    output_dir: str = "./SAOut"
    report_json: str = "struct_report.json"
    report_txt: Optional[str] = "struct_report.txt"
    error_file: Optional[str] = "errors.txt"
    generated_dir: str = "generated"

    # 생성 설정
    top_n: int = 5
    java_package: Optional[str] = None
    support_package: str = "org.currierg.pojos"

    # 로깅
    log_dir: str = "logs"
    log_level: str = "INFO"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """값 검증, 실패 시 ConfigError"""
        if not isinstance(self.top_n, int) or isinstance(self.top_n, bool) or self.top_n < 1:
            raise ConfigError(f"top_n은 1 이상의 정수여야 합니다: {self.top_n!r}")
        for name in ("include_patterns", "exclude_patterns"):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
                raise ConfigError(f"{name}은 문자열 리스트여야 합니다: {value!r}")
        if not isinstance(self.preserve_line_numbers, bool):
            raise ConfigError(
                f"preserve_line_numbers는 true/false 여야 합니다: {self.preserve_line_numbers!r}"
            )
        for name in ("primary_encoding", "fallback_encoding"):
            try:
                codecs.lookup(getattr(self, name))
            except (LookupError, TypeError) as e:
                raise ConfigError(f"알 수 없는 인코딩 {name}: {getattr(self, name)!r}") from e
        if not self.report_json:
            raise ConfigError("report_json이 지정되지 않았습니다")

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def report_json_path(self) -> Path:
        return self.output_path / self.report_json

    @property
    def report_txt_path(self) -> Optional[Path]:
        return self.output_path / self.report_txt if self.report_txt else None

    @property
    def error_file_path(self) -> Optional[Path]:
        return self.output_path / self.error_file if self.error_file else None

    @property
    def generated_path(self) -> Path:
        return self.output_path / self.generated_dir

    @property
    def log_path(self) -> Path:
        return self.output_path / self.log_dir

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """딕셔너리에서 설정 생성 (알 수 없는 키는 경고 후 무시)"""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"알 수 없는 설정 키 무시: {key}")
                continue
            values[key] = value
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigError(f"잘못된 설정 값: {e}") from e


def load_settings(path: str, overrides: Optional[Dict[str, Any]] = None) -> Settings:
    """
    YAML 설정 파일 로드

    Args:
        path: 설정 파일 경로
        overrides: 파일 값 위에 덮어쓸 값 (CLI 옵션 등)

    Returns:
        Settings

    Raises:
        ConfigError: 파일이 없거나 형식이 잘못된 경우
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"설정 파일을 찾을 수 없습니다: {path}")

    logger.info(f"설정 파일 로드: {config_path}")
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 파싱 오류: {path}: {e}") from e

    if data is None:
        logger.warning("빈 설정 파일입니다, 기본값 사용")
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("잘못된 설정 형식: 딕셔너리가 필요합니다")

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    settings = Settings.from_dict(data)
    if not settings.source_root:
        raise ConfigError("source_root가 지정되지 않았습니다")
    return settings
