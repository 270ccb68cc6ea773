"""
구조체 필드 파서
구조체 본문 텍스트에서 필드 선언을 파싱합니다.
"""
from dataclasses import dataclass
from typing import List, Optional

from shared_config.logger import GENERATE_PHASE, get_logger
from struct_extractor.patterns import PATTERN_PREPROCESSOR_LINE, PATTERN_STRUCT_FIELD

log = get_logger(GENERATE_PHASE)


@dataclass
class FieldDescriptor:
    """구조체 필드 정보"""
    name: str                          # 필드명
    c_type: str                        # 선언된 C 타입 토큰 (예: int, unsigned int, Foo)
    is_pointer: bool = False           # 포인터 여부
    repetition: Optional[str] = None   # [..] 안의 값 (배열 길이/비트필드 폭 구분 불가, 빈 문자열 가능)
    is_struct: bool = False            # struct 키워드 명시 여부

    @property
    def has_repetition(self) -> bool:
        return self.repetition is not None


class FieldParser:
    """
    구조체 본문의 필드 선언을 파싱하는 클래스

    ';' 로 끝나는 문장 하나를 [struct] Type [*] name [[repetition]] 형태와 전체 비교합니다.
    반복 토큰은 배열 길이와 비트필드 폭을 구분하지 않으며, 콜론 표기
    비트필드(name : width)나 여러 선언자(int a, b;)는 인식하지 않습니다.

    사용 예:
        parser = FieldParser()
        fields = parser.parse("int a; char b[4]; struct Foo *c;")
    """

    FIELD_PATTERN = PATTERN_STRUCT_FIELD

    def parse(self, body: str) -> List[FieldDescriptor]:
        """
        본문 텍스트를 파싱하여 필드 목록 추출

        Args:
            body: 중괄호 안쪽 본문 (주석 제거된 상태)

        Returns:
            선언 순서의 FieldDescriptor 리스트
        """
        fields = []
        body = PATTERN_PREPROCESSOR_LINE.sub("", body)

        # 마지막 ';' 뒤의 나머지는 문장이 아님
        for statement in body.split(";")[:-1]:
            descriptor = self.parse_statement(statement)
            if descriptor is None:
                if statement.strip():
                    log.debug(f"필드로 인식되지 않은 문장: {statement.strip()!r}")
                continue
            fields.append(descriptor)

        return fields

    def parse_statement(self, statement: str) -> Optional[FieldDescriptor]:
        match = self.FIELD_PATTERN.fullmatch(statement)
        if not match:
            return None

        repetition = match.group("repetition")
        if repetition is not None:
            repetition = repetition.strip()

        return FieldDescriptor(
            name=match.group("name"),
            c_type=" ".join(match.group("type").split()),
            is_pointer=bool(match.group("pointer")),
            repetition=repetition,
            is_struct=bool(match.group("struct")),
        )
