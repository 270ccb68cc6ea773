"""
struct_extractor 모듈
C 소스 코퍼스에서 구조체 선언/사용 위치를 추출해 타입 레지스트리를 만듭니다.
"""

from .types import (
    Location,
    DeclarationShape,
    SourceUnit,
    LineIndex,
    DeclarationCandidate,
    Declaration,
    TypeRegistryEntry,
)
from .errors import (
    ErrorKind,
    ErrorRecord,
    ErrorSink,
    SourceRootError,
    SourceReadError,
    SourceDecodeError,
    ReportError,
)
from .comment_stripper import CommentStripper, strip_comments
from .registry import TypeRegistry
from .declarations import ShapeRule, DeclarationExtractor, DEFAULT_SHAPE_RULES
from .usage_detector import UsageDetector
from .source_reader import SourceReader, discover_sources, decode_source
from .scanner import StructScanner
from .report import write_json_report, write_text_report, render_text_report, load_json_report

__all__ = [
    # 타입
    "Location",
    "DeclarationShape",
    "SourceUnit",
    "LineIndex",
    "DeclarationCandidate",
    "Declaration",
    "TypeRegistryEntry",
    # 오류
    "ErrorKind",
    "ErrorRecord",
    "ErrorSink",
    "SourceRootError",
    "SourceReadError",
    "SourceDecodeError",
    "ReportError",
    # 추출
    "CommentStripper",
    "strip_comments",
    "TypeRegistry",
    "ShapeRule",
    "DeclarationExtractor",
    "DEFAULT_SHAPE_RULES",
    "UsageDetector",
    "SourceReader",
    "discover_sources",
    "decode_source",
    "StructScanner",
    # 보고서
    "write_json_report",
    "write_text_report",
    "render_text_report",
    "load_json_report",
]
