"""Static value and cost tables for plantations and buildings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from colony_advisor.models import ResourceType


class BuildingCategory(str, Enum):
    PRODUCTION = "production"
    MARKET = "market"
    SETTLEMENT = "settlement"
    CONSTRUCTION = "construction"
    STORAGE = "storage"
    LARGE = "large"


@dataclass(frozen=True, slots=True)
class Lookup:
    """Result of a catalog lookup; ``value`` is ``None`` when the name is not tabulated."""

    value: float | None

    @property
    def known(self) -> bool:
        return self.value is not None

    def or_zero(self) -> float:
        return 0.0 if self.value is None else self.value


@dataclass(frozen=True, slots=True)
class BuildingSpec:
    name: str
    cost: int
    category: BuildingCategory
    resource: ResourceType | None
    base_value: float


RESOURCE_BASE_VALUES: dict[ResourceType, float] = {
    ResourceType.CORN: 3.0,
    ResourceType.INDIGO: 2.6,
    ResourceType.SUGAR: 2.2,
    ResourceType.TOBACCO: 1.8,
    ResourceType.COFFEE: 1.7,
}

# Starting plantations that gain little from a second copy.
WEAK_STARTING_RESOURCES: frozenset[ResourceType] = frozenset({ResourceType.INDIGO})

RECOMMENDABLE_BUILDINGS: tuple[BuildingSpec, ...] = (
    BuildingSpec("Small Indigo Plant", 1, BuildingCategory.PRODUCTION, ResourceType.INDIGO, 2.0),
    BuildingSpec("Small Sugar Mill", 2, BuildingCategory.PRODUCTION, ResourceType.SUGAR, 1.8),
    BuildingSpec("Small Market", 1, BuildingCategory.MARKET, None, 1.6),
    BuildingSpec("Hacienda", 2, BuildingCategory.SETTLEMENT, None, 1.4),
    BuildingSpec("Construction Hut", 2, BuildingCategory.CONSTRUCTION, None, 1.1),
    BuildingSpec("Small Warehouse", 3, BuildingCategory.STORAGE, None, 1.0),
    BuildingSpec("Indigo Plant", 3, BuildingCategory.PRODUCTION, ResourceType.INDIGO, 2.4),
    BuildingSpec("Sugar Mill", 4, BuildingCategory.PRODUCTION, ResourceType.SUGAR, 2.2),
    BuildingSpec("Hospice", 4, BuildingCategory.SETTLEMENT, None, 1.5),
    BuildingSpec("Office", 5, BuildingCategory.MARKET, None, 1.3),
    BuildingSpec("Large Market", 5, BuildingCategory.MARKET, None, 1.5),
    BuildingSpec("Tobacco Storage", 5, BuildingCategory.PRODUCTION, ResourceType.TOBACCO, 2.3),
    BuildingSpec("Coffee Roaster", 6, BuildingCategory.PRODUCTION, ResourceType.COFFEE, 2.5),
)

_SPECS_BY_NAME: dict[str, BuildingSpec] = {spec.name: spec for spec in RECOMMENDABLE_BUILDINGS}

# Buildings the advisor never suggests but an opponent may still buy.
BUILDING_COSTS: dict[str, int] = {
    **{spec.name: spec.cost for spec in RECOMMENDABLE_BUILDINGS},
    "Large Warehouse": 6,
    "Factory": 7,
    "University": 8,
    "Harbor": 8,
    "Wharf": 9,
    "Guild Hall": 10,
    "Residence": 10,
    "Fortress": 10,
    "Customs House": 10,
    "City Hall": 10,
}

_CANONICAL_NAMES: dict[str, str] = {" ".join(name.lower().split()): name for name in BUILDING_COSTS}


def canonical_building_name(raw: str) -> str:
    """Return the catalog spelling of ``raw``; unknown names come back stripped."""
    key = " ".join(raw.lower().split())
    return _CANONICAL_NAMES.get(key, raw.strip())


def resource_value(resource: ResourceType | None) -> Lookup:
    if resource is None:
        return Lookup(None)
    return Lookup(RESOURCE_BASE_VALUES.get(resource))


def building_cost(name: str) -> Lookup:
    cost = BUILDING_COSTS.get(canonical_building_name(name))
    return Lookup(None if cost is None else float(cost))


def building_spec(name: str) -> BuildingSpec | None:
    return _SPECS_BY_NAME.get(canonical_building_name(name))


def affordable_buildings(money: int, owned: set[str]) -> list[BuildingSpec]:
    """Catalog buildings in table order that cost at most ``money`` and are not yet owned."""
    return [spec for spec in RECOMMENDABLE_BUILDINGS if spec.cost <= money and spec.name not in owned]
