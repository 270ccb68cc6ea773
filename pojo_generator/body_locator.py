"""
구조체 본문 위치 탐색 모듈

레지스트리 위치가 가리키는 파일을 다시 읽어 중괄호로 둘러싸인 본문을 분리합니다.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from shared_config.logger import GENERATE_PHASE, get_logger
from struct_extractor.comment_stripper import CommentStripper
from struct_extractor.patterns import PATTERN_DECLARATION_START
from struct_extractor.source_reader import SourceReader
from struct_extractor.types import Location

log = get_logger(GENERATE_PHASE)


class BodyNotFoundError(Exception):
    """위치에서 구조체 본문을 찾지 못함"""

    def __init__(self, location: Location, reason: str):
        super().__init__(f"{location}: {reason}")
        self.location = location
        self.reason = reason


class UnmatchedBracesError(BodyNotFoundError):
    """중괄호 짝이 맞지 않음"""

    def __init__(self, location: Location, depth: int, line: Optional[int] = None):
        where = f" (line {line})" if line else ""
        super().__init__(location, f"unmatched braces, depth = {depth}{where}")
        self.depth = depth


@dataclass
class StructBody:
    """분리된 구조체 본문 (바깥 중괄호 제외)"""
    location: Location
    text: str
    end_line: int


class BodyLocator:
    """
    구조체 본문 탐색기

    시작 라인부터 '{' 마다 +1, '}' 마다 -1 하며 깊이가 다시 0이 될 때까지
    본문을 모읍니다. '{' 보다 ';' 가 먼저 나오면 본문 없는 전방 선언으로 봅니다.
    시작 라인은 선언 키워드(typedef, struct, #pragma, __attribute__)부터 봅니다.
    읽은 파일은 주석을 라인 보존 방식으로 제거한 뒤 이 탐색기 안에서만 캐시합니다.

    사용 예:
        locator = BodyLocator(SourceReader(Path("./src")))
        body = locator.locate(Location("a.h", 1))
    """

    def __init__(self, reader: SourceReader):
        self.reader = reader
        self._stripper = CommentStripper(preserve_lines=True)
        self._lines: Dict[str, List[str]] = {}

    def lines_of(self, path: str) -> List[str]:
        """주석 제거된 파일 라인 (OSError 전파)"""
        if path not in self._lines:
            unit = self.reader.read_relative(path)
            self._lines[path] = self._stripper.strip(unit.text).split("\n")
        return self._lines[path]

    def locate(self, location: Location) -> StructBody:
        """
        위치에서 본문 분리

        Raises:
            BodyNotFoundError: 라인 범위 초과, 전방 선언, 여는 중괄호 없음
            UnmatchedBracesError: 깊이가 음수가 되거나 파일 끝까지 닫히지 않음
            OSError: 파일 읽기 실패
        """
        lines = self.lines_of(location.path)
        start = location.line - 1
        if not 0 <= start < len(lines):
            raise BodyNotFoundError(
                location, f"line number out of bounds (file has {len(lines)} lines)"
            )

        depth = 0
        started = False
        chunks: List[str] = []
        for index in range(start, len(lines)):
            line = self._from_declaration(lines[index]) if index == start else lines[index]
            for char in line:
                if char == "{":
                    if started:
                        chunks.append(char)
                    depth += 1
                    started = True
                elif char == "}":
                    depth -= 1
                    if depth < 0:
                        raise UnmatchedBracesError(location, depth, index + 1)
                    if depth == 0:
                        return StructBody(location, "".join(chunks), index + 1)
                    chunks.append(char)
                elif char == ";" and not started:
                    raise BodyNotFoundError(location, "forward declaration without body")
                elif started:
                    chunks.append(char)
            if started:
                chunks.append("\n")

        if started:
            raise UnmatchedBracesError(location, depth)
        raise BodyNotFoundError(location, "no struct body found")

    @staticmethod
    def _from_declaration(line: str) -> str:
        """시작 라인에서 선언 키워드 이전 부분 제거 (앞선 문장의 ';' 무시)"""
        match = PATTERN_DECLARATION_START.search(line)
        return line[match.start():] if match else line

    def has_body(self, location: Location) -> bool:
        """위치에서 '{' 가 ';' 보다 먼저 나오는지 (짝 검사는 하지 않음)"""
        try:
            lines = self.lines_of(location.path)
        except OSError as e:
            log.warning(f"Error reading {location.path}: {e}")
            return False

        start = location.line - 1
        if not 0 <= start < len(lines):
            return False
        for line in [self._from_declaration(lines[start])] + lines[start + 1:]:
            for char in line:
                if char == "{":
                    return True
                if char in ";}":
                    return False
        return False

    def owning_location(self, locations: Sequence[Location]) -> Optional[Location]:
        """
        본문이 있는 첫 위치, 없으면 첫 위치

        전방 선언만 있는 위치를 건너뛰고 실제 '{' 본문이 있는 파일을 찾습니다.
        """
        if not locations:
            return None
        for location in locations:
            if self.has_body(location):
                return location
        log.warning(
            f"본문 있는 정의를 찾지 못해 첫 위치로 대체: {locations[0]}"
        )
        return locations[0]
