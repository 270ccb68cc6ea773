"""
pojo_generator 모듈
타입 레지스트리의 상위 구조체를 Java POJO 소스로 생성합니다.
"""

from .field_parser import FieldParser, FieldDescriptor
from .type_mapper import (
    TypeMapper,
    MappedType,
    Primitive,
    Reference,
    Repeated,
    Opaque,
    render_java_type,
)
from .body_locator import BodyLocator, BodyNotFoundError, UnmatchedBracesError, StructBody
from .emitter import JavaClassEmitter, GeneratedClass, GeneratedField
from .generator import PojoGenerator, GenerationResult

__all__ = [
    # 필드 파서
    "FieldParser",
    "FieldDescriptor",
    # 타입 매핑
    "TypeMapper",
    "MappedType",
    "Primitive",
    "Reference",
    "Repeated",
    "Opaque",
    "render_java_type",
    # 본문 탐색
    "BodyLocator",
    "BodyNotFoundError",
    "UnmatchedBracesError",
    "StructBody",
    # 생성
    "JavaClassEmitter",
    "GeneratedClass",
    "GeneratedField",
    "PojoGenerator",
    "GenerationResult",
]
