import pytest

from tripmatch.models.domain import DeliveryStop, StopPriority, StopType
from tripmatch.services.routing.metrics import estimate_route_metrics, leg_distances_km


def _stop(sid: str, stop_type: StopType, lat: float, lon: float, priority=StopPriority.FLEXIBLE) -> DeliveryStop:
    return DeliveryStop(
        id=sid,
        order_id=sid.split("_")[-1],
        type=stop_type,
        address="",
        latitude=lat,
        longitude=lon,
        priority=priority,
        estimated_duration=stop_type.service_minutes,
        customer_name="Customer",
        customer_phone="",
        materials=[],
    )


def test_empty_route() -> None:
    metrics = estimate_route_metrics([])

    assert metrics.total_distance == 0
    assert metrics.total_duration == 0
    assert metrics.estimated_fuel_cost == 0
    assert metrics.fuel_savings == 0
    assert metrics.time_savings == 0
    assert metrics.optimization_score == 60


def test_single_stop_counts_service_time_only() -> None:
    metrics = estimate_route_metrics([_stop("pickup_A", StopType.PICKUP, 25.0, 55.0)])

    assert metrics.total_distance == 0
    assert metrics.total_duration == 15
    assert metrics.fuel_savings == 0


def test_two_stop_route() -> None:
    # 0.1 degree of longitude on the equator is about 11.12 km.
    stops = [
        _stop("pickup_A", StopType.PICKUP, 0.0, 0.0),
        _stop("delivery_A", StopType.DELIVERY, 0.0, 0.1),
    ]

    metrics = estimate_route_metrics(stops)

    assert leg_distances_km(stops) == [pytest.approx(11.1195, abs=1e-3)]
    assert metrics.total_distance == 11.1
    assert metrics.total_duration == 57
    assert metrics.estimated_fuel_cost == pytest.approx(8.90)
    assert metrics.fuel_savings == 23
    assert metrics.time_savings == 7
    assert metrics.optimization_score == 83


def test_fuel_cost_follows_configured_rate() -> None:
    stops = [
        _stop("pickup_A", StopType.PICKUP, 0.0, 0.0),
        _stop("delivery_A", StopType.DELIVERY, 0.0, 0.1),
    ]

    assert estimate_route_metrics(stops, fuel_cost_per_km=1.5).estimated_fuel_cost == pytest.approx(16.68)


def test_asap_bonus_is_capped() -> None:
    stops = [
        _stop("pickup_A", StopType.PICKUP, 0.0, 0.0, StopPriority.ASAP),
        _stop("delivery_A", StopType.DELIVERY, 0.0, 0.1, StopPriority.ASAP),
        _stop("pickup_B", StopType.PICKUP, 0.05, 0.2),
    ]

    metrics = estimate_route_metrics(stops)

    assert metrics.optimization_score == 95
    assert metrics.total_distance >= 0
    assert metrics.total_duration >= 0
    assert metrics.estimated_fuel_cost >= 0
    assert metrics.fuel_savings >= 0
    assert metrics.time_savings >= 0


def test_coincident_stops_have_no_savings() -> None:
    stops = [
        _stop("pickup_A", StopType.PICKUP, 25.0, 55.0),
        _stop("delivery_A", StopType.DELIVERY, 25.0, 55.0),
    ]

    metrics = estimate_route_metrics(stops)

    assert metrics.total_distance == 0
    assert metrics.total_duration == 35
    assert metrics.fuel_savings == 0
    assert metrics.optimization_score == 60
