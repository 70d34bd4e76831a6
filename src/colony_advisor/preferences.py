"""Session-local memory of moves the player affirmed by hand."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from colony_advisor.catalog import canonical_building_name
from colony_advisor.models import ResourceType, Role


@dataclass(frozen=True, slots=True)
class PreferenceKey:
    category: str
    resource: str | None = None
    building: str | None = None

    @classmethod
    def for_move(
        cls,
        role: Role | str,
        resource: ResourceType | str | None = None,
        building: str | None = None,
    ) -> PreferenceKey:
        parsed_role = Role.parse(role)
        category = parsed_role.value if parsed_role is not None else str(role).strip()
        parsed = ResourceType.parse(resource)
        return cls(
            category=category,
            resource=parsed.value if parsed is not None else None,
            building=canonical_building_name(building) if building else None,
        )


class PreferenceMemory:
    """Counts affirmations per move; counts only grow until :meth:`clear`."""

    def __init__(self) -> None:
        self._counts: Counter[PreferenceKey] = Counter()

    def record(self, key: PreferenceKey) -> int:
        self._counts[key] += 1
        return self._counts[key]

    def count(self, key: PreferenceKey) -> int:
        return self._counts.get(key, 0)

    def bonus(self, key: PreferenceKey, weight: float) -> float:
        return weight * self.count(key)

    def clear(self) -> None:
        self._counts.clear()

    def items(self) -> list[tuple[PreferenceKey, int]]:
        return sorted(self._counts.items(), key=lambda item: item[1], reverse=True)

    def __len__(self) -> int:
        return len(self._counts)
