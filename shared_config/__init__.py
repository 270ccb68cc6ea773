"""
shared_config 모듈
공통 타입 매핑, 네이밍 규칙, 로깅, 실행 설정을 중앙 관리합니다.
"""

from .type_mappings import (
    C_PRIMITIVE_KINDS,
    JAVA_TYPE_BY_KIND,
    OPAQUE_JAVA_TYPE,
    UNSIGNED_INT_CLASS,
    get_primitive_kind,
    get_java_type,
    normalize_c_type,
)

from .naming_rules import (
    capitalize,
    getter_name,
    setter_name,
    output_file_name,
)

from .logger import (
    logger,
    get_logger,
    set_console_level,
    setup_file_logging,
    LogStage,
    ANALYSIS_PHASE,
    GENERATE_PHASE,
)

from .settings import (
    Settings,
    ConfigError,
    load_settings,
)

__all__ = [
    # type_mappings
    "C_PRIMITIVE_KINDS",
    "JAVA_TYPE_BY_KIND",
    "OPAQUE_JAVA_TYPE",
    "UNSIGNED_INT_CLASS",
    "get_primitive_kind",
    "get_java_type",
    "normalize_c_type",
    # naming_rules
    "capitalize",
    "getter_name",
    "setter_name",
    "output_file_name",
    # logger
    "logger",
    "get_logger",
    "set_console_level",
    "setup_file_logging",
    "LogStage",
    "ANALYSIS_PHASE",
    "GENERATE_PHASE",
    # settings
    "Settings",
    "ConfigError",
    "load_settings",
]
