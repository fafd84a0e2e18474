import logging

import pytest

from tripmatch.services.matching.compatibility import TruckCategory, check_truck_compatibility, is_compatible


def test_alias_matches_category() -> None:
    result = check_truck_compatibility("Small Truck", {"small_truck"})

    assert result.is_compatible is True
    assert result.category is TruckCategory.SMALL
    assert result.matched_types == frozenset({"small_truck"})


def test_different_category_is_rejected() -> None:
    assert is_compatible("Small Truck", {"large_truck"}) is False


def test_no_requirement_is_always_compatible() -> None:
    assert is_compatible(None, set()) is True
    assert is_compatible("", {"dump"}) is True


def test_exact_name_match() -> None:
    assert is_compatible("Lowboy Trailer", {"Lowboy Trailer"}) is True


@pytest.mark.parametrize(
    "required, driver_type",
    [
        ("Medium Truck (3.5-7.5t)", "medium"),
        ("concrete_mixer", "Concrete Mixer"),
        ("Heavy Truck", "Heavy Truck (18t+)"),
        ("refrigerated", "refrigerated_truck"),
    ],
)
def test_any_spelling_resolves_to_its_category(required: str, driver_type: str) -> None:
    assert is_compatible(required, {driver_type}) is True


def test_unknown_type_is_a_category_miss(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = check_truck_compatibility("Hovercraft", {"small_truck", "box"})

    assert result.is_compatible is False
    assert result.category_miss is True
    assert result.category is None
    assert "Hovercraft" in caplog.text


def test_every_category_accepts_its_own_name() -> None:
    for category in TruckCategory:
        assert category.value in category.aliases
        assert TruckCategory.resolve(category.value) is category
