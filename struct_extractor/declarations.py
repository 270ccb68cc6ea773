"""
구조체 선언 추출 모듈

주석이 제거된 텍스트에서 선언 후보를 찾고, 형태 규칙을 우선순위 순서로 적용해
정규 이름을 결정합니다.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from shared_config.logger import logger

from .errors import ErrorKind, ErrorSink
from .patterns import (
    PATTERN_BROAD_STRUCT,
    PATTERN_FORWARD_STRUCT,
    PATTERN_PACKED_STRUCT,
    PATTERN_TAGGED_STRUCT,
    PATTERN_TYPEDEF_STRUCT,
)
from .registry import TypeRegistry
from .types import (
    Declaration,
    DeclarationCandidate,
    DeclarationShape,
    LineIndex,
    Location,
    SourceUnit,
)


@dataclass(frozen=True)
class ShapeRule:
    """선언 형태 규칙

    Attributes:
        shape: 선언 형태
        pattern: 후보 전체와 일치해야 하는 정규식
        name_groups: 이름 후보 그룹 (앞에 있는 그룹이 우선)
    """
    shape: DeclarationShape
    pattern: re.Pattern
    name_groups: Tuple[str, ...]

    def name_of(self, content: str) -> Optional[str]:
        match = self.pattern.fullmatch(content)
        if not match:
            return None
        for group in self.name_groups:
            if match.group(group):
                return match.group(group)
        return None


# 판별 우선순위: typedef → tagged → packed → forward
DEFAULT_SHAPE_RULES: Tuple[ShapeRule, ...] = (
    ShapeRule(DeclarationShape.TYPEDEF, PATTERN_TYPEDEF_STRUCT, ("alias", "tag")),
    ShapeRule(DeclarationShape.TAGGED, PATTERN_TAGGED_STRUCT, ("tag",)),
    ShapeRule(DeclarationShape.PACKED, PATTERN_PACKED_STRUCT, ("tag",)),
    ShapeRule(DeclarationShape.FORWARD, PATTERN_FORWARD_STRUCT, ("tag",)),
)


class DeclarationExtractor:
    """
    구조체 선언 추출기

    사용 예:
        extractor = DeclarationExtractor()
        for candidate in extractor.find_candidates(unit, clean_text):
            declaration = extractor.disambiguate(candidate)
    """

    BROAD_PATTERN = PATTERN_BROAD_STRUCT

    def __init__(self, rules: Optional[Sequence[ShapeRule]] = None):
        self._rules: Tuple[ShapeRule, ...] = tuple(rules or DEFAULT_SHAPE_RULES)

    @property
    def priority(self) -> List[DeclarationShape]:
        """판별 우선순위 (앞이 먼저)"""
        return [rule.shape for rule in self._rules]

    def find_candidates(self, unit: SourceUnit, clean_text: str) -> List[DeclarationCandidate]:
        """넓은 패턴으로 선언 후보를 텍스트 순서대로 수집"""
        return [
            DeclarationCandidate(match.group(0), unit, match.start())
            for match in self.BROAD_PATTERN.finditer(clean_text)
        ]

    def disambiguate(self, candidate: DeclarationCandidate) -> Optional[Declaration]:
        """
        후보에 형태 규칙을 우선순위 순서로 적용

        Returns:
            처음으로 전체 일치한 규칙의 Declaration, 없으면 None
        """
        for rule in self._rules:
            name = rule.name_of(candidate.content)
            if name:
                return Declaration(name, rule.shape, candidate)
        return None

    def extract(
        self,
        unit: SourceUnit,
        clean_text: str,
        line_index: LineIndex,
        registry: TypeRegistry,
        errors: Optional[ErrorSink] = None,
    ) -> List[Declaration]:
        """
        선언을 찾아 레지스트리에 정의 위치로 등록

        판별에 실패한 후보는 오류로 기록하고 건너뜁니다.

        Returns:
            판별에 성공한 선언 목록
        """
        declarations = []
        for candidate in self.find_candidates(unit, clean_text):
            declaration = self.disambiguate(candidate)
            if declaration is None:
                logger.warning(f"File: {unit.path}\n잘못된 구조체 매칭: {candidate.content}\n---")
                if errors is not None:
                    errors.record(
                        ErrorKind.MALFORMED_DECLARATION,
                        f"Invalid struct match in {unit.path}: {candidate.content}",
                    )
                continue

            location = Location(unit.path, line_index.line_at(candidate.start))
            registry.add_definition(declaration.name, location)
            declarations.append(declaration)
            logger.debug(f"선언 발견: {declaration.name} ({declaration.shape.value}) at {location}")
        return declarations
