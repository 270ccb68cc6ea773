"""
구조체 사용 위치 탐지 모듈

이미 레지스트리에 정의가 있는 이름에 대해서만 값 수준 참조를 기록합니다.
"""

from typing import List, Optional

from shared_config.logger import logger

from .patterns import PATTERN_STRUCT_USAGE
from .registry import TypeRegistry
from .types import LineIndex, Location, SourceUnit


class UsageDetector:
    """
    구조체 사용 탐지기

    인식 형태:
        [struct] Name *var;       [struct] Name var[10];
        [struct] Name var, ...    [struct] Name var = { ... }

    구조체 본문 내부의 필드 선언도 같은 형태이므로 사용으로 집계됩니다.
    정의가 없는 이름은 무시하며, 새 레지스트리 항목을 만들지 않습니다.
    '*' 양쪽에 공백이 있는 포인터 선언(struct Name * var;)은 인식하지 않습니다.
    """

    PATTERN = PATTERN_STRUCT_USAGE

    def find_names(self, clean_text: str) -> List[tuple]:
        """(이름, 시작 오프셋) 목록"""
        result = []
        for match in self.PATTERN.finditer(clean_text):
            name = self._first_name(match.groups())
            if name:
                result.append((name, match.start()))
        return result

    @staticmethod
    def _first_name(groups) -> Optional[str]:
        for group in groups:
            if group:
                return group
        return None

    def detect(
        self,
        unit: SourceUnit,
        clean_text: str,
        line_index: LineIndex,
        registry: TypeRegistry,
    ) -> int:
        """
        사용 위치를 레지스트리에 추가

        Returns:
            새로 기록된 사용 위치 수
        """
        added = 0
        for name, start in self.find_names(clean_text):
            if name not in registry:
                continue
            location = Location(unit.path, line_index.line_at(start))
            if registry.add_usage(name, location):
                added += 1
                logger.debug(f"사용 발견: {name} at {location}")
        return added
