"""
구조체 추출에 사용되는 타입 정의 모듈

Location, DeclarationShape, SourceUnit, TypeRegistryEntry 등의 데이터 클래스를 정의합니다.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List


@dataclass(frozen=True)
class Location:
    """소스 위치 (상대 경로, 1부터 시작하는 라인 번호)"""
    path: str
    line: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"

    @classmethod
    def parse(cls, text: str) -> "Location":
        """
        "path:line" 문자열을 Location으로 변환

        경로에 ':' 가 포함될 수 있으므로 마지막 ':' 기준으로 분리합니다.

        Raises:
            ValueError: 형식이 잘못된 경우
        """
        path, sep, line = text.rpartition(":")
        if not sep or not path or not line.isdigit():
            raise ValueError(f"잘못된 위치 형식: {text!r}")
        return cls(path, int(line))


class DeclarationShape(Enum):
    """선언 형태 (나열 순서가 곧 판별 우선순위)"""
    TYPEDEF = "typedef"   # typedef struct [tag] { ... } Alias;
    TAGGED = "tagged"     # struct Tag { ... }
    PACKED = "packed"     # #pragma pack(n) struct Tag { ... }
    FORWARD = "forward"   # struct Tag;

    @property
    def has_body(self) -> bool:
        return self is not DeclarationShape.FORWARD


@dataclass
class SourceUnit:
    """읽어들인 소스 파일 (상대 경로 + 디코딩된 내용)"""
    path: str
    text: str

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")


class LineIndex:
    """
    문자 오프셋 → 라인 번호 변환

    라인 목록을 순서대로 소비하면서 (길이 + 개행 1) 을 누적하고,
    누적 위치가 오프셋을 넘는 첫 라인을 반환합니다.
    오프셋이 전체 길이를 넘으면 마지막 라인 + 1 을 반환합니다.
    """

    def __init__(self, lines: Iterable[str]):
        self._ends: List[int] = []
        position = 0
        for line in lines:
            position += len(line) + 1
            self._ends.append(position)

    def line_at(self, offset: int) -> int:
        return bisect_right(self._ends, offset) + 1


@dataclass
class DeclarationCandidate:
    """선언 후보 (넓은 패턴에 매칭된 원본 부분 문자열)"""
    content: str
    unit: SourceUnit
    start: int


@dataclass
class Declaration:
    """판별 완료된 선언"""
    name: str
    shape: DeclarationShape
    candidate: DeclarationCandidate


@dataclass
class TypeRegistryEntry:
    """
    구조체 이름별 정의/사용 위치

    같은 (path, line) 위치는 한 번만 기록되며 최초 발견 순서를 유지합니다.
    """
    name: str
    definitions: List[Location] = field(default_factory=list)
    usages: List[Location] = field(default_factory=list)

    def add_definition(self, location: Location) -> bool:
        if location in self.definitions:
            return False
        self.definitions.append(location)
        return True

    def add_usage(self, location: Location) -> bool:
        if location in self.usages:
            return False
        self.usages.append(location)
        return True

    @property
    def total_count(self) -> int:
        return len(self.definitions) + len(self.usages)

    def to_dict(self) -> dict:
        """딕셔너리로 변환 (JSON 저장용)"""
        return {
            "name": self.name,
            "count": self.total_count,
            "definitionFiles": [str(loc) for loc in self.definitions],
            "usageFiles": [str(loc) for loc in self.usages],
        }
