"""Truck-type compatibility between trips and drivers.

Truck types reach us under several spellings (catalogue names, snake_case
keys from the registration form, display strings with weight classes). Each
canonical category lists every spelling it accepts, and a driver qualifies
when their registered types intersect the required category's aliases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Optional


class TruckCategory(str, Enum):
    SMALL = "Small Truck"
    MEDIUM = "Medium Truck"
    LARGE = "Large Truck"
    HEAVY = "Heavy Truck"
    FLATBED = "Flatbed Truck"
    DUMP = "Dump Truck"
    CONCRETE_MIXER = "Concrete Mixer"
    CRANE = "Crane Truck"
    BOX = "Box Truck"
    REFRIGERATED = "Refrigerated Truck"

    @property
    def aliases(self) -> frozenset[str]:
        """Every accepted spelling, including the canonical name."""
        return _ALIASES[self] | {self.value}

    @classmethod
    def resolve(cls, name: str) -> Optional["TruckCategory"]:
        for category in cls:
            if name in category.aliases:
                return category
        return None


_ALIASES: dict[TruckCategory, frozenset[str]] = {
    TruckCategory.SMALL: frozenset({"small_truck", "Small Truck (up to 3.5t)", "small"}),
    TruckCategory.MEDIUM: frozenset({"medium_truck", "Medium Truck (3.5-7.5t)", "medium"}),
    TruckCategory.LARGE: frozenset({"large_truck", "Large Truck (7.5-18t)", "large"}),
    TruckCategory.HEAVY: frozenset({"heavy_truck", "Heavy Truck (18t+)", "heavy"}),
    TruckCategory.FLATBED: frozenset({"flatbed_truck", "Flatbed Truck", "flatbed"}),
    TruckCategory.DUMP: frozenset({"dump_truck", "Dump Truck", "dump"}),
    TruckCategory.CONCRETE_MIXER: frozenset({"concrete_mixer", "Concrete Mixer", "mixer"}),
    TruckCategory.CRANE: frozenset({"crane_truck", "Crane Truck", "crane"}),
    TruckCategory.BOX: frozenset({"box_truck", "Box Truck", "box"}),
    TruckCategory.REFRIGERATED: frozenset({"refrigerated_truck", "Refrigerated Truck", "refrigerated"}),
}


@dataclass(slots=True, frozen=True)
class CompatibilityResult:
    is_compatible: bool
    required_truck_type: Optional[str]
    category: Optional[TruckCategory] = None
    category_miss: bool = False
    matched_types: frozenset[str] = field(default_factory=frozenset)


def check_truck_compatibility(
    required_truck_type: Optional[str], driver_truck_types: AbstractSet[str]
) -> CompatibilityResult:
    if not required_truck_type:
        return CompatibilityResult(is_compatible=True, required_truck_type=None)

    if required_truck_type in driver_truck_types:
        return CompatibilityResult(
            is_compatible=True,
            required_truck_type=required_truck_type,
            category=TruckCategory.resolve(required_truck_type),
            matched_types=frozenset({required_truck_type}),
        )

    category = TruckCategory.resolve(required_truck_type)
    if category is None:
        logging.warning(f"Truck type '{required_truck_type}' has no known category; drivers have {sorted(driver_truck_types)}")
        return CompatibilityResult(
            is_compatible=False,
            required_truck_type=required_truck_type,
            category_miss=True,
        )

    matched = category.aliases & frozenset(driver_truck_types)
    return CompatibilityResult(
        is_compatible=bool(matched),
        required_truck_type=required_truck_type,
        category=category,
        matched_types=matched,
    )


def is_compatible(required_truck_type: Optional[str], driver_truck_types: AbstractSet[str]) -> bool:
    return check_truck_compatibility(required_truck_type, driver_truck_types).is_compatible
