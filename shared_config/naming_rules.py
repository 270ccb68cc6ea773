"""
네이밍 규칙 설정
접근자 이름, 생성 파일 이름 규칙을 관리합니다.
"""
from pathlib import PurePosixPath
from typing import Set

from .type_mappings import JAVA_SOURCE_EXTENSION


def capitalize(name: str) -> str:
    """
    첫 글자만 대문자로 변환 (JavaBean 접근자 규칙)

    Examples:
        userName -> UserName
        x -> X
        rfrn_date -> Rfrn_date
    """
    if not name:
        return name
    return name[0].upper() + name[1:]


def getter_name(field_name: str) -> str:
    return f"get{capitalize(field_name)}"


def setter_name(field_name: str) -> str:
    return f"set{capitalize(field_name)}"


def output_file_name(
    source_path: str,
    used_names: Set[str],
    extension: str = JAVA_SOURCE_EXTENSION
) -> str:
    """
    소스 파일 경로에서 생성 파일 이름 결정

    확장자를 대상 언어 확장자로 교체합니다. 같은 실행에서 이미 사용된
    이름이면 원래 확장자를 붙이고, 그것도 사용 중이면 번호를 붙입니다.

    Examples:
        include/point.h -> point.java
        src/point.c (point.java 사용 중) -> point_c.java
        b/point.c (point_c.java 도 사용 중) -> point_c_2.java
    """
    source = PurePosixPath(source_path)
    candidate = f"{source.stem}{extension}"
    if candidate not in used_names:
        return candidate

    base = f"{source.stem}_{source.suffix.lstrip('.') or 'src'}"
    candidate = f"{base}{extension}"
    counter = 2
    while candidate in used_names:
        candidate = f"{base}_{counter}{extension}"
        counter += 1
    return candidate
