"""
분석 보고서 모듈

레지스트리를 JSON(재로드용) / TXT(열람용)로 저장하고, JSON 보고서에서 다시 읽습니다.

JSON 형식:
    {
        "definitions": [
            {"name": "Point", "count": 2,
             "definitionFiles": ["a.h:1"], "usageFiles": ["b.c:1"]}
        ]
    }
"""

import json
from pathlib import Path

from shared_config.logger import ANALYSIS_PHASE, get_logger

from .errors import ReportError
from .registry import TypeRegistry

log = get_logger(ANALYSIS_PHASE)

TEXT_SEPARATOR = "---------------------"


def write_json_report(registry: TypeRegistry, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(registry.to_export(), f, ensure_ascii=False, indent=2)
    log.info(f"JSON 보고서 저장: {path}")
    return path


def render_text_report(registry: TypeRegistry) -> str:
    lines = [
        "Struct Analysis Report",
        "=====================",
    ]
    for entry in registry:
        lines.append(f"Struct: {entry.name}")
        lines.append(f"Total References: {entry.total_count}")
        lines.append(f"Definitions: [{', '.join(str(loc) for loc in entry.definitions)}]")
        lines.append(f"Usages: [{', '.join(str(loc) for loc in entry.usages)}]")
        lines.append(TEXT_SEPARATOR)
    return "\n".join(lines) + "\n"


def write_text_report(registry: TypeRegistry, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_text_report(registry), encoding="utf-8")
    log.info(f"TXT 보고서 저장: {path}")
    return path


def load_json_report(path: Path) -> TypeRegistry:
    """
    JSON 보고서에서 레지스트리 복원

    Raises:
        ReportError: 파일이 없거나, JSON/구조가 잘못된 경우
    """
    path = Path(path)
    if not path.exists():
        raise ReportError(f"보고서 파일을 찾을 수 없습니다: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        registry = TypeRegistry.from_export(data)
    except (OSError, ValueError) as e:
        raise ReportError(f"보고서를 읽을 수 없습니다: {path}: {e}") from e

    if not len(registry):
        log.warning(f"보고서에 정의가 없습니다: {path}")
    else:
        log.info(f"보고서에서 구조체 {len(registry)}개 로드: {path}")
    return registry
