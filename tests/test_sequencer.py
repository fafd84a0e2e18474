from tripmatch.models.domain import Coordinate, DeliveryStop, StopPriority, StopType
from tripmatch.services.routing.sequencer import find_nearest_stop, sequence_stops


def _stop(
    order_id: str,
    stop_type: StopType,
    lat: float,
    lon: float,
    priority: StopPriority = StopPriority.FLEXIBLE,
) -> DeliveryStop:
    return DeliveryStop(
        id=f"{stop_type.value}_{order_id}",
        order_id=order_id,
        type=stop_type,
        address=f"{stop_type.value} {order_id}",
        latitude=lat,
        longitude=lon,
        priority=priority,
        estimated_duration=stop_type.service_minutes,
        customer_name="Customer",
        customer_phone="",
        materials=["Materials"],
    )


def _ids(stops) -> list[str]:
    return [stop.id for stop in stops]


def test_short_inputs_are_returned_unchanged() -> None:
    single = [_stop("A", StopType.PICKUP, 25.0, 55.0)]

    assert sequence_stops([]) == []
    result = sequence_stops(single)
    assert result == single
    assert result is not single


def test_two_asap_orders_from_origin() -> None:
    # Driver at (0, 0); A is nearer than B.
    stops = [
        _stop("A", StopType.PICKUP, 0.0, 0.01, StopPriority.ASAP),
        _stop("A", StopType.DELIVERY, 0.0, 0.02, StopPriority.ASAP),
        _stop("B", StopType.PICKUP, 0.0, 0.05, StopPriority.ASAP),
        _stop("B", StopType.DELIVERY, 0.0, 0.06, StopPriority.ASAP),
    ]

    ordered = sequence_stops(stops, Coordinate(0.0, 0.0))

    assert _ids(ordered) == ["pickup_A", "pickup_B", "delivery_A", "delivery_B"]


def test_asap_stops_precede_flexible_ones() -> None:
    stops = [
        _stop("F", StopType.PICKUP, 0.0, 0.001),
        _stop("F", StopType.DELIVERY, 0.0, 0.002),
        _stop("U", StopType.PICKUP, 0.0, 0.5, StopPriority.ASAP),
        _stop("U", StopType.DELIVERY, 0.0, 0.6, StopPriority.ASAP),
    ]

    ordered = sequence_stops(stops, Coordinate(0.0, 0.0))

    assert _ids(ordered[:2]) == ["pickup_U", "delivery_U"]
    assert sorted(_ids(ordered[2:])) == ["delivery_F", "pickup_F"]


def test_every_stop_appears_once() -> None:
    stops = [
        _stop("A", StopType.PICKUP, 25.00, 55.00, StopPriority.ASAP),
        _stop("A", StopType.DELIVERY, 25.20, 55.10, StopPriority.ASAP),
        _stop("B", StopType.PICKUP, 25.05, 55.30),
        _stop("B", StopType.DELIVERY, 25.15, 55.05),
        _stop("C", StopType.DELIVERY, 25.10, 55.20, StopPriority.ASAP),
    ]

    ordered = sequence_stops(stops, Coordinate(24.9, 54.9))

    assert sorted(_ids(ordered)) == sorted(_ids(stops))


def test_delivery_never_precedes_its_pickup() -> None:
    # The delivery of B sits right next to the driver, its pickup far away.
    stops = [
        _stop("B", StopType.PICKUP, 0.0, 1.0),
        _stop("B", StopType.DELIVERY, 0.0, 0.001),
        _stop("C", StopType.PICKUP, 0.0, 0.5),
        _stop("C", StopType.DELIVERY, 0.0, 0.002),
    ]

    for prioritize in (True, False):
        ordered = _ids(sequence_stops(stops, Coordinate(0.0, 0.0), prioritize_asap=prioritize))
        assert ordered.index("pickup_B") < ordered.index("delivery_B")
        assert ordered.index("pickup_C") < ordered.index("delivery_C")


def test_unknown_location_starts_from_first_stop() -> None:
    stops = [
        _stop("A", StopType.PICKUP, 0.0, 0.10),
        _stop("B", StopType.PICKUP, 0.0, 0.50),
        _stop("C", StopType.PICKUP, 0.0, 0.12),
    ]

    assert _ids(sequence_stops(stops)) == ["pickup_A", "pickup_C", "pickup_B"]


def test_disabling_asap_priority_uses_plain_nearest_neighbour() -> None:
    stops = [
        _stop("F", StopType.PICKUP, 0.0, 0.001),
        _stop("U", StopType.PICKUP, 0.0, 0.5, StopPriority.ASAP),
    ]

    ordered = sequence_stops(stops, Coordinate(0.0, 0.0), prioritize_asap=False)

    assert _ids(ordered) == ["pickup_F", "pickup_U"]


def test_ties_resolve_to_first_candidate() -> None:
    first = _stop("A", StopType.PICKUP, 0.0, 0.01)
    second = _stop("B", StopType.PICKUP, 0.0, -0.01)

    assert find_nearest_stop(Coordinate(0.0, 0.0), [first, second]) is first
    assert find_nearest_stop(Coordinate(0.0, 0.0), [second, first]) is second


def test_asap_order_resolved_before_flexible_without_current_location() -> None:
    stops = [
        _stop("A", StopType.PICKUP, 0.0, 0.0, StopPriority.ASAP),
        _stop("A", StopType.DELIVERY, 0.0, 1.0, StopPriority.ASAP),
        _stop("B", StopType.PICKUP, 0.0, 0.5),
        _stop("B", StopType.DELIVERY, 0.0, 1.5),
    ]

    assert _ids(sequence_stops(stops)) == ["pickup_A", "delivery_A", "pickup_B", "delivery_B"]
