"""
타입 변환 매핑 설정
새로운 타입 추가/수정 시 이 파일만 수정하면 됩니다.
"""
from typing import Optional

# =============================================================================
# C 타입 토큰 → 기본 타입 종류 매핑
# =============================================================================
PRIMITIVE_INT = "int"          # 부호 있는 32비트 정수
PRIMITIVE_UINT = "uint"        # 부호 없는 32비트 정수
PRIMITIVE_CHAR = "char"        # 문자 (스칼라/배열 모두 문자열로 취급)

C_PRIMITIVE_KINDS = {
    "int": PRIMITIVE_INT,
    "signed": PRIMITIVE_INT,
    "signed int": PRIMITIVE_INT,
    "int32_t": PRIMITIVE_INT,
    "unsigned": PRIMITIVE_UINT,
    "unsigned int": PRIMITIVE_UINT,
    "uint32_t": PRIMITIVE_UINT,
    "char": PRIMITIVE_CHAR,
}

# 타입 비교 시 무시하는 한정자
TYPE_QUALIFIERS = {"const", "volatile"}

# =============================================================================
# 기본 타입 종류 → Java 타입
# =============================================================================
JAVA_TYPE_BY_KIND = {
    PRIMITIVE_INT: "Integer",
    PRIMITIVE_UINT: "UnsignedInt",
    PRIMITIVE_CHAR: "String",
}

OPAQUE_JAVA_TYPE = "Object"
LIST_JAVA_TYPE = "List"
LIST_IMPORT = "java.util.List"

# 부호 없는 정수 보조 클래스
UNSIGNED_INT_CLASS = "UnsignedInt"
UNSIGNED_INT_MIN = 0
UNSIGNED_INT_MAX = 2 ** 32 - 1

JAVA_SOURCE_EXTENSION = ".java"


# =============================================================================
# 헬퍼 함수
# =============================================================================

def normalize_c_type(c_type: str) -> str:
    """
    한정자를 제거하고 공백을 정리한 C 타입 토큰

    Examples:
        "unsigned   int" -> "unsigned int"
        "const char" -> "char"
    """
    return " ".join(t for t in c_type.split() if t not in TYPE_QUALIFIERS)


def get_primitive_kind(c_type: str) -> Optional[str]:
    """C 타입 토큰의 기본 타입 종류, 기본 타입이 아니면 None"""
    return C_PRIMITIVE_KINDS.get(normalize_c_type(c_type))


def get_java_type(kind: str) -> str:
    """기본 타입 종류를 Java 타입으로 변환"""
    return JAVA_TYPE_BY_KIND[kind]
