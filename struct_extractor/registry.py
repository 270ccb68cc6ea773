"""
타입 레지스트리 모듈

구조체 이름 → 정의/사용 위치 맵. 추출 단계가 채우고 생성 단계가 읽습니다.
"""

from typing import Any, Dict, Iterator, List, Optional

from shared_config.logger import logger

from .types import Location, TypeRegistryEntry


class TypeRegistry:
    """구조체 타입 레지스트리

    항목은 처음 발견될 때 생성되고 이후 제자리에서 갱신되며 삭제되지 않습니다.
    이름 공간은 평면적이어서 코퍼스 전체에서 이름이 유일하다고 가정합니다.

    Example:
        registry = TypeRegistry()
        registry.add_definition("Point", Location("a.h", 1))
        registry.add_usage("Point", Location("b.c", 1))
        registry.get("Point").total_count  # 2
    """

    def __init__(self):
        self._entries: Dict[str, TypeRegistryEntry] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TypeRegistryEntry]:
        return iter(self._entries.values())

    def get(self, name: str) -> Optional[TypeRegistryEntry]:
        return self._entries.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._entries)

    def add_definition(self, name: str, location: Location) -> bool:
        """정의 위치 추가 (항목이 없으면 생성)

        Returns:
            새 위치가 추가되었으면 True, 이미 있던 위치면 False
        """
        entry = self._entries.get(name)
        if entry is None:
            entry = self._entries[name] = TypeRegistryEntry(name)
        return entry.add_definition(location)

    def add_usage(self, name: str, location: Location) -> bool:
        """사용 위치 추가 (정의가 알려진 이름만, 항목을 새로 만들지 않음)

        Returns:
            새 위치가 추가되었으면 True
        """
        entry = self._entries.get(name)
        if entry is None:
            return False
        return entry.add_usage(location)

    def top(self, n: int) -> List[TypeRegistryEntry]:
        """총 참조 수 내림차순 상위 n개 (동점은 이름 오름차순)"""
        ranked = sorted(self._entries.values(), key=lambda e: (-e.total_count, e.name))
        return ranked[:n]

    def to_export(self) -> Dict[str, List[Dict[str, Any]]]:
        """보고서 저장용 구조로 변환"""
        return {"definitions": [entry.to_dict() for entry in self._entries.values()]}

    @classmethod
    def from_export(cls, data: Dict[str, Any]) -> "TypeRegistry":
        """
        보고서 구조에서 레지스트리 복원

        중복 위치는 다시 제거되며 count 는 위치 목록으로부터 재계산됩니다.

        Raises:
            ValueError: 구조가 잘못된 경우
        """
        if not isinstance(data, dict) or not isinstance(data.get("definitions"), list):
            raise ValueError("'definitions' 리스트가 없습니다")

        registry = cls()
        for i, item in enumerate(data["definitions"]):
            if not isinstance(item, dict) or not item.get("name"):
                raise ValueError(f"항목 {i}: 'name' 이 없습니다")
            name = item["name"]
            entry = registry._entries.setdefault(name, TypeRegistryEntry(name))
            for text in item.get("definitionFiles") or []:
                entry.add_definition(Location.parse(text))
            for text in item.get("usageFiles") or []:
                entry.add_usage(Location.parse(text))

            stored = item.get("count")
            if stored is not None and stored != entry.total_count:
                logger.debug(f"{name}: 저장된 count {stored} → 재계산 {entry.total_count}")
        return registry
