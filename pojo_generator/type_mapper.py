"""
C 필드 → Java 타입 매핑 모듈

매핑 결과는 MappedType 합 타입으로 표현합니다:
    Primitive(kind) | Reference(name) | Repeated(element) | Opaque
"""

from dataclasses import dataclass
from typing import Iterable, Set, Union

from shared_config.type_mappings import (
    LIST_JAVA_TYPE,
    OPAQUE_JAVA_TYPE,
    PRIMITIVE_UINT,
    get_java_type,
    get_primitive_kind,
    normalize_c_type,
)

from .field_parser import FieldDescriptor


@dataclass(frozen=True)
class Primitive:
    """기본 타입 (shared_config.type_mappings 의 종류 값)"""
    kind: str


@dataclass(frozen=True)
class Reference:
    """레지스트리에 알려진 구조체 참조"""
    name: str


@dataclass(frozen=True)
class Repeated:
    """반복(리스트) 타입"""
    element: "MappedType"


@dataclass(frozen=True)
class Opaque:
    """알 수 없는 타입"""


MappedType = Union[Primitive, Reference, Repeated, Opaque]


class TypeMapper:
    """
    필드 타입 매퍼

    우선순위:
        1. 포인터: 알려진 구조체면 Reference, 아니면 Opaque (반복 토큰 무시)
        2. 반복 토큰 있음: Repeated(기본 타입)
        3. 스칼라: 기본 타입 표, 알려진 구조체면 Reference, 아니면 Opaque

    반복 토큰이 비트필드 폭일 가능성은 구분하지 않고 항상 Repeated 로 매핑합니다.

    사용 예:
        mapper = TypeMapper(known_types={"Foo"})
        mapper.map_field(FieldDescriptor("c", "Foo", is_pointer=True))
        # Reference("Foo")
    """

    def __init__(self, known_types: Iterable[str] = ()):
        self.known_types: Set[str] = set(known_types)

    def map_field(self, field: FieldDescriptor) -> MappedType:
        if field.is_pointer:
            return self._reference_or_opaque(field.c_type)
        if field.has_repetition:
            return Repeated(self.base_type(field.c_type))
        return self.base_type(field.c_type)

    def base_type(self, c_type: str) -> MappedType:
        kind = get_primitive_kind(c_type)
        if kind is not None:
            return Primitive(kind)
        return self._reference_or_opaque(c_type)

    def _reference_or_opaque(self, c_type: str) -> MappedType:
        name = normalize_c_type(c_type)
        if name in self.known_types:
            return Reference(name)
        return Opaque()


def render_java_type(mapped: MappedType) -> str:
    """MappedType → Java 타입 문자열"""
    if isinstance(mapped, Primitive):
        return get_java_type(mapped.kind)
    if isinstance(mapped, Reference):
        return mapped.name
    if isinstance(mapped, Repeated):
        return f"{LIST_JAVA_TYPE}<{render_java_type(mapped.element)}>"
    return OPAQUE_JAVA_TYPE


def uses_list(mapped: MappedType) -> bool:
    return isinstance(mapped, Repeated)


def uses_unsigned(mapped: MappedType) -> bool:
    if isinstance(mapped, Repeated):
        return uses_unsigned(mapped.element)
    return isinstance(mapped, Primitive) and mapped.kind == PRIMITIVE_UINT
