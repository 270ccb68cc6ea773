"""
Java POJO 소스 생성기
구조체 필드 정보를 Java 클래스 소스로 변환합니다.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from shared_config.naming_rules import getter_name, setter_name
from shared_config.type_mappings import (
    LIST_IMPORT,
    UNSIGNED_INT_CLASS,
    UNSIGNED_INT_MAX,
    UNSIGNED_INT_MIN,
)

from .field_parser import FieldDescriptor
from .type_mapper import MappedType, TypeMapper, render_java_type, uses_list, uses_unsigned

INDENT = "    "


@dataclass
class GeneratedField:
    """생성 대상 필드"""
    descriptor: FieldDescriptor
    mapped: MappedType

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def java_type(self) -> str:
        return render_java_type(self.mapped)


@dataclass
class GeneratedClass:
    """생성 대상 클래스"""
    name: str
    fields: List[GeneratedField] = field(default_factory=list)
    needs_list: bool = False
    needs_unsigned: bool = False


class JavaClassEmitter:
    """
    Java 클래스 소스 생성 클래스

    클래스 구성:
        private 필드 (파싱 순서), 기본 생성자, 전체 필드 생성자,
        필드별 getter/setter

    사용 예:
        emitter = JavaClassEmitter(java_package="com.example.dto")
        cls = emitter.build_class("Point", fields, TypeMapper({"Point"}))
        source = emitter.render_unit([cls], unit_name="point")
    """

    def __init__(
        self,
        java_package: Optional[str] = None,
        support_package: str = "org.currierg.pojos"
    ):
        """
        Args:
            java_package: 생성 클래스의 패키지 (None이면 package 선언 생략)
            support_package: UnsignedInt 보조 클래스의 패키지
        """
        self.java_package = java_package
        self.support_package = support_package

    def build_class(
        self,
        name: str,
        descriptors: Sequence[FieldDescriptor],
        mapper: TypeMapper
    ) -> GeneratedClass:
        generated = GeneratedClass(name)
        for descriptor in descriptors:
            mapped = mapper.map_field(descriptor)
            generated.fields.append(GeneratedField(descriptor, mapped))
            generated.needs_list = generated.needs_list or uses_list(mapped)
            generated.needs_unsigned = generated.needs_unsigned or uses_unsigned(mapped)
        return generated

    def imports_for(self, classes: Sequence[GeneratedClass]) -> List[str]:
        imports: Set[str] = set()
        if any(c.needs_list for c in classes):
            imports.add(LIST_IMPORT)
        if any(c.needs_unsigned for c in classes) and self.support_package != self.java_package:
            imports.add(f"{self.support_package}.{UNSIGNED_INT_CLASS}")
        return sorted(imports)

    def render_unit(self, classes: Sequence[GeneratedClass], unit_name: str) -> str:
        """
        출력 단위(파일 하나) 소스 생성

        클래스 이름이 unit_name 과 같은 클래스만 public 으로 선언합니다.
        """
        lines = []
        if self.java_package:
            lines.append(f"package {self.java_package};")
            lines.append("")

        imports = self.imports_for(classes)
        for imp in imports:
            lines.append(f"import {imp};")
        if imports:
            lines.append("")

        for cls in classes:
            lines.extend(self.render_class(cls, public=(cls.name == unit_name)))
            lines.append("")

        return "\n".join(lines)

    def render_class(self, cls: GeneratedClass, public: bool = True) -> List[str]:
        modifier = "public class" if public else "class"
        lines = [f"{modifier} {cls.name} {{"]

        for f in cls.fields:
            lines.append(f"{INDENT}private {f.java_type} {f.name};")
        if cls.fields:
            lines.append("")

        # 생성자
        lines.append(f"{INDENT}public {cls.name}() {{}}")
        if cls.fields:
            params = ", ".join(f"{f.java_type} {f.name}" for f in cls.fields)
            lines.append("")
            lines.append(f"{INDENT}public {cls.name}({params}) {{")
            for f in cls.fields:
                lines.append(f"{INDENT * 2}this.{f.name} = {f.name};")
            lines.append(f"{INDENT}}}")

        # 접근자
        for f in cls.fields:
            lines.append("")
            lines.append(f"{INDENT}public {f.java_type} {getter_name(f.name)}() {{ return {f.name}; }}")
            lines.append(
                f"{INDENT}public void {setter_name(f.name)}({f.java_type} {f.name}) "
                f"{{ this.{f.name} = {f.name}; }}"
            )

        lines.append("}")
        return lines

    def render_unsigned_int(self) -> str:
        """범위 검사를 하는 부호 없는 32비트 정수 보조 클래스 소스"""
        return "\n".join([
            f"package {self.support_package};",
            "",
            f"public class {UNSIGNED_INT_CLASS} {{",
            f"{INDENT}public static final long MIN_VALUE = {UNSIGNED_INT_MIN}L;",
            f"{INDENT}public static final long MAX_VALUE = {UNSIGNED_INT_MAX}L;",
            "",
            f"{INDENT}private long value;",
            "",
            f"{INDENT}public {UNSIGNED_INT_CLASS}(long value) {{",
            f"{INDENT * 2}setValue(value);",
            f"{INDENT}}}",
            "",
            f"{INDENT}public long getValue() {{ return value; }}",
            "",
            f"{INDENT}public void setValue(long value) {{",
            f"{INDENT * 2}if (value < MIN_VALUE || value > MAX_VALUE) {{",
            f'{INDENT * 3}throw new IllegalArgumentException("Value must be between 0 and 2^32-1: " + value);',
            f"{INDENT * 2}}}",
            f"{INDENT * 2}this.value = value;",
            f"{INDENT}}}",
            "",
            f"{INDENT}@Override",
            f"{INDENT}public String toString() {{ return String.valueOf(value); }}",
            "}",
            "",
        ])
