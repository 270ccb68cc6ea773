"""
구조체 분석 실행 모듈

소스 파일을 한 번에 하나씩 처리하며 레지스트리를 채웁니다.
파일 단위 실패는 기록만 하고 다음 파일로 진행합니다.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from shared_config.logger import ANALYSIS_PHASE, LogStage, get_logger
from shared_config.settings import Settings

from .comment_stripper import CommentStripper
from .declarations import DeclarationExtractor
from .errors import ErrorKind, ErrorSink, SourceDecodeError
from .registry import TypeRegistry
from .source_reader import SourceReader, discover_sources
from .types import LineIndex, SourceUnit
from .usage_detector import UsageDetector

log = get_logger(ANALYSIS_PHASE)


class StructScanner:
    """
    구조체 분석기

    파일별 처리 순서: 주석 제거 → 선언 추출 (레지스트리 등록) → 사용 탐지

    사용 예:
        scanner = StructScanner("./src", include_patterns=["*.h", "*.c"])
        registry = scanner.scan()
    """

    def __init__(
        self,
        source_root: str,
        include_patterns: Sequence[str] = ("*.c", "*.h"),
        exclude_patterns: Sequence[str] = (),
        primary_encoding: str = "utf-8",
        fallback_encoding: str = "latin-1",
        preserve_line_numbers: bool = True,
        errors: Optional[ErrorSink] = None,
    ):
        """
        Args:
            source_root: 분석할 소스 루트 디렉토리
            include_patterns: 포함할 상대 경로 글롭
            exclude_patterns: 제외할 상대 경로 글롭
            primary_encoding: 기본 인코딩
            fallback_encoding: 기본 인코딩 실패 시 사용할 인코딩
            preserve_line_numbers: False면 주석을 통째로 제거하고 원본 라인 기준으로 위치 계산
            errors: 오류 채널 (없으면 메모리에만 보관)
        """
        self.source_root = Path(source_root)
        self.include_patterns = list(include_patterns)
        self.exclude_patterns = list(exclude_patterns)
        self.preserve_line_numbers = preserve_line_numbers
        self.errors = errors if errors is not None else ErrorSink()

        self.reader = SourceReader(self.source_root, primary_encoding, fallback_encoding)
        self.stripper = CommentStripper(preserve_lines=preserve_line_numbers)
        self.extractor = DeclarationExtractor()
        self.usage_detector = UsageDetector()

        self.files_scanned = 0
        self.files_failed = 0

    @classmethod
    def from_settings(cls, settings: Settings, errors: Optional[ErrorSink] = None) -> "StructScanner":
        return cls(
            settings.source_root,
            include_patterns=settings.include_patterns,
            exclude_patterns=settings.exclude_patterns,
            primary_encoding=settings.primary_encoding,
            fallback_encoding=settings.fallback_encoding,
            preserve_line_numbers=settings.preserve_line_numbers,
            errors=errors,
        )

    def discover(self) -> List[Path]:
        return discover_sources(self.source_root, self.include_patterns, self.exclude_patterns)

    def scan(self, registry: Optional[TypeRegistry] = None) -> TypeRegistry:
        """
        소스 루트 전체 분석

        Raises:
            SourceRootError: 소스 루트를 읽을 수 없는 경우
        """
        registry = registry if registry is not None else TypeRegistry()

        with LogStage("구조체 분석", log=log, root=self.source_root):
            files = self.discover()
            log.info(f"분석 대상 파일 {len(files)}개")
            for path in files:
                self.scan_file(path, registry)

            log.info(
                f"분석 완료: 파일 {self.files_scanned}개, 실패 {self.files_failed}개, "
                f"구조체 {len(registry)}개"
            )
        return registry

    def scan_file(self, path: Path, registry: TypeRegistry) -> None:
        """파일 하나 분석, 읽기 실패는 기록 후 건너뜀"""
        try:
            unit = self.reader.read(path)
        except SourceDecodeError as e:
            self.files_failed += 1
            log.warning(f"File: {path}\n디코딩 실패로 건너뜀: {e}\n---")
            self.errors.record(ErrorKind.DECODE, f"Decode Error processing {path}: {e}")
            return
        except OSError as e:
            self.files_failed += 1
            log.warning(f"File: {path}\nIO 오류로 건너뜀: {e}\n---")
            self.errors.record(ErrorKind.IO, f"IO Error processing {path}: {e}")
            return

        self.scan_unit(unit, registry)
        self.files_scanned += 1

    def scan_unit(self, unit: SourceUnit, registry: TypeRegistry) -> None:
        """읽어들인 소스 하나 분석"""
        clean_text = self.stripper.strip(unit.text)
        if self.preserve_line_numbers:
            line_index = LineIndex(clean_text.split("\n"))
        else:
            line_index = LineIndex(unit.lines)

        declarations = self.extractor.extract(unit, clean_text, line_index, registry, self.errors)
        usages = self.usage_detector.detect(unit, clean_text, line_index, registry)
        log.debug(f"{unit.path}: 선언 {len(declarations)}개, 사용 {usages}개")
