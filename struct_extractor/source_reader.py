"""
소스 파일 탐색 및 읽기 모듈

include/exclude 글롭으로 분석 대상 파일을 고르고, 기본 인코딩 실패 시
대체 인코딩으로 다시 디코딩합니다.
"""

from fnmatch import fnmatch
from pathlib import Path
from typing import List, Sequence

from shared_config.logger import logger

from .errors import SourceDecodeError, SourceReadError, SourceRootError
from .types import SourceUnit


def matches_any(relative_path: str, patterns: Sequence[str]) -> bool:
    """상대 경로(posix)가 글롭 패턴 중 하나와 일치하는지 (* 는 / 도 포함)"""
    return any(fnmatch(relative_path, pattern) for pattern in patterns)


def discover_sources(
    root: Path,
    include_patterns: Sequence[str],
    exclude_patterns: Sequence[str] = (),
) -> List[Path]:
    """
    소스 루트 아래 분석 대상 파일 목록 (상대 경로 순 정렬)

    Raises:
        SourceRootError: 루트가 없거나 디렉토리가 아닌 경우
    """
    root = Path(root)
    if not root.is_dir():
        raise SourceRootError(f"소스 디렉토리를 읽을 수 없습니다: {root}")

    try:
        candidates = sorted(p for p in root.rglob("*") if p.is_file())
    except OSError as e:
        raise SourceRootError(f"소스 디렉토리 탐색 실패: {root}: {e}") from e

    files = []
    for path in candidates:
        relative = path.relative_to(root).as_posix()
        if not matches_any(relative, include_patterns):
            continue
        if matches_any(relative, exclude_patterns):
            logger.debug(f"제외됨: {relative}")
            continue
        files.append(path)
    return files


def decode_source(path: Path, primary: str = "utf-8", fallback: str = "latin-1") -> str:
    """
    파일을 읽어 디코딩 (개행은 \\n 으로 통일)

    Raises:
        SourceReadError: 읽기 실패
        SourceDecodeError: 두 인코딩 모두 디코딩 실패
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(f"{type(e).__name__} - {e}") from e

    try:
        text = raw.decode(primary)
    except UnicodeDecodeError:
        logger.debug(f"{primary} 디코딩 실패, {fallback} 로 재시도: {path}")
        try:
            text = raw.decode(fallback)
        except UnicodeDecodeError as e:
            raise SourceDecodeError(f"디코딩 실패 ({primary}, {fallback}): {e}") from e

    return text.replace("\r\n", "\n").replace("\r", "\n")


class SourceReader:
    """
    소스 루트 기준 파일 읽기

    사용 예:
        reader = SourceReader(Path("./src"))
        unit = reader.read(Path("./src/include/point.h"))
        unit.path  # "include/point.h"
    """

    def __init__(self, root: Path, primary_encoding: str = "utf-8", fallback_encoding: str = "latin-1"):
        self.root = Path(root)
        self.primary_encoding = primary_encoding
        self.fallback_encoding = fallback_encoding

    def relative(self, path: Path) -> str:
        return Path(path).relative_to(self.root).as_posix()

    def read(self, path: Path) -> SourceUnit:
        text = decode_source(path, self.primary_encoding, self.fallback_encoding)
        return SourceUnit(self.relative(path), text)

    def read_relative(self, relative_path: str) -> SourceUnit:
        return self.read(self.root / relative_path)
