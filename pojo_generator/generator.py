"""
POJO 파일 생성기
분석 레지스트리에서 참조 수 상위 구조체를 골라 소스 파일별 Java 파일을 생성합니다.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from shared_config.logger import GENERATE_PHASE, LogStage, get_logger
from shared_config.naming_rules import output_file_name
from shared_config.settings import Settings
from shared_config.type_mappings import JAVA_SOURCE_EXTENSION, UNSIGNED_INT_CLASS
from struct_extractor.errors import ErrorKind, ErrorSink, SourceDecodeError
from struct_extractor.registry import TypeRegistry
from struct_extractor.source_reader import SourceReader
from struct_extractor.types import Location, TypeRegistryEntry

from .body_locator import BodyLocator, BodyNotFoundError, UnmatchedBracesError
from .emitter import GeneratedClass, JavaClassEmitter
from .field_parser import FieldParser
from .type_mapper import TypeMapper

log = get_logger(GENERATE_PHASE)

DEFAULT_TOP_N = 5


@dataclass
class GenerationResult:
    """생성 결과"""
    written: List[Path] = field(default_factory=list)
    classes: Dict[str, List[str]] = field(default_factory=dict)   # 출력 파일명 → 클래스명 목록
    skipped: List[str] = field(default_factory=list)               # 건너뛴 구조체 이름


class PojoGenerator:
    """
    POJO 생성 클래스

    워크플로우:
    1. 총 참조 수 내림차순(동점은 이름순) 상위 N개 선택
    2. 선택된 구조체의 첫 정의 파일(중복 제거)마다 그 파일을 첫 정의로 가진 모든 구조체 수집
    3. 구조체별로 실제 '{' 본문이 있는 위치를 찾아 본문 파일 기준으로 다시 묶음
    4. 본문 파일마다 Java 파일 하나 생성

    사용 예:
        generator = PojoGenerator(registry, "./src", "./SAOut/generated")
        result = generator.generate()
    """

    def __init__(
        self,
        registry: TypeRegistry,
        source_root: str,
        output_dir: str,
        top_n: int = DEFAULT_TOP_N,
        java_package: Optional[str] = None,
        support_package: str = "org.currierg.pojos",
        primary_encoding: str = "utf-8",
        fallback_encoding: str = "latin-1",
        errors: Optional[ErrorSink] = None,
    ):
        self.registry = registry
        self.output_dir = Path(output_dir)
        self.top_n = top_n
        self.errors = errors if errors is not None else ErrorSink()

        self.locator = BodyLocator(SourceReader(Path(source_root), primary_encoding, fallback_encoding))
        self.parser = FieldParser()
        self.mapper = TypeMapper(registry.names)
        self.emitter = JavaClassEmitter(java_package, support_package)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: TypeRegistry,
        errors: Optional[ErrorSink] = None
    ) -> "PojoGenerator":
        return cls(
            registry,
            settings.source_root,
            str(settings.generated_path),
            top_n=settings.top_n,
            java_package=settings.java_package,
            support_package=settings.support_package,
            primary_encoding=settings.primary_encoding,
            fallback_encoding=settings.fallback_encoding,
            errors=errors,
        )

    def select(self) -> List[TypeRegistryEntry]:
        return self.registry.top(self.top_n)

    def owning_files(self, selected: List[TypeRegistryEntry]) -> List[str]:
        """선택된 구조체들의 첫 정의 파일 (선택 순서, 중복 제거)"""
        files: List[str] = []
        for entry in selected:
            if not entry.definitions:
                log.warning(f"정의 위치가 없어 건너뜀: {entry.name}")
                continue
            path = entry.definitions[0].path
            if path not in files:
                files.append(path)
        return files

    def plan(self) -> Dict[str, List[Tuple[TypeRegistryEntry, Location]]]:
        """
        본문 파일 → (구조체, 본문 위치) 목록

        같은 구조체는 한 번만 포함됩니다.
        """
        by_first_file: Dict[str, List[TypeRegistryEntry]] = {}
        for entry in self.registry:
            if entry.definitions:
                by_first_file.setdefault(entry.definitions[0].path, []).append(entry)

        units: Dict[str, List[Tuple[TypeRegistryEntry, Location]]] = {}
        planned = set()
        for source_file in self.owning_files(self.select()):
            for entry in by_first_file.get(source_file, []):
                if entry.name in planned:
                    continue
                planned.add(entry.name)
                log.debug(f"{entry.name} 정의 탐색: {[str(loc) for loc in entry.definitions]}")
                location = self.locator.owning_location(entry.definitions)
                units.setdefault(location.path, []).append((entry, location))
        return units

    def generate(self) -> GenerationResult:
        result = GenerationResult()

        with LogStage("POJO 생성", log=log, top_n=self.top_n, output=self.output_dir):
            units = self.plan()
            self.output_dir.mkdir(parents=True, exist_ok=True)

            used_names = set()
            needs_unsigned = False
            for source_file, members in units.items():
                classes = []
                for entry, location in members:
                    generated = self.build_class(entry, location)
                    if generated is None:
                        result.skipped.append(entry.name)
                        continue
                    classes.append(generated)

                if not classes:
                    log.warning(f"{source_file}: 생성할 클래스가 없어 파일을 만들지 않음")
                    continue

                file_name = output_file_name(source_file, used_names)
                used_names.add(file_name)
                path = self._write(file_name, self.emitter.render_unit(classes, Path(file_name).stem))
                if path is None:
                    continue
                result.written.append(path)
                result.classes[file_name] = [c.name for c in classes]
                needs_unsigned = needs_unsigned or any(c.needs_unsigned for c in classes)

            if needs_unsigned:
                path = self._write(UNSIGNED_INT_CLASS + JAVA_SOURCE_EXTENSION, self.emitter.render_unsigned_int())
                if path is not None:
                    result.written.append(path)

            log.info(
                f"상위 {self.top_n}개 구조체 기준 {len(result.classes)}개 파일 생성, "
                f"건너뜀 {len(result.skipped)}개"
            )
        return result

    def build_class(self, entry: TypeRegistryEntry, location: Location) -> Optional[GeneratedClass]:
        """
        구조체 하나의 클래스 구성, 본문을 찾지 못하면 기록 후 None
        """
        try:
            body = self.locator.locate(location)
        except UnmatchedBracesError as e:
            log.warning(f"Unmatched braces for {entry.name} at {e.location}: {e.reason}")
            self.errors.record(ErrorKind.UNMATCHED_BRACES, f"Unmatched braces for {entry.name} at {e}")
            return None
        except BodyNotFoundError as e:
            log.warning(f"No struct body found for {entry.name} at {e}")
            self.errors.record(ErrorKind.MISSING_BODY, f"No struct body found for {entry.name} at {e}")
            return None
        except SourceDecodeError as e:
            log.warning(f"Error decoding {location.path} for {entry.name}: {e}")
            self.errors.record(ErrorKind.DECODE, f"Error decoding {location.path} for {entry.name}: {e}")
            return None
        except OSError as e:
            log.warning(f"Error reading {location.path} for {entry.name}: {e}")
            self.errors.record(ErrorKind.IO, f"Error reading {location.path} for {entry.name}: {e}")
            return None

        fields = self.parser.parse(body.text)
        if not fields:
            log.warning(f"No fields parsed for {entry.name} from body: {body.text.strip()!r}")
            self.errors.record(ErrorKind.NO_FIELDS, f"No fields parsed for {entry.name} at {location}")

        return self.emitter.build_class(entry.name, fields, self.mapper)

    def _write(self, file_name: str, content: str) -> Optional[Path]:
        path = self.output_dir / file_name
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            log.error(f"Error writing {file_name}: {e}")
            self.errors.record(ErrorKind.IO, f"Error writing {file_name}: {e}")
            return None
        log.info(f"생성: {path}")
        return path
