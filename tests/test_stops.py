from tripmatch.models.domain import Location, MaterialLine, StopPriority, StopType, TripRequest
from tripmatch.services.routing.stops import project_stops


def _order(
    oid: str,
    pickup: tuple[float, float] | None = (25.0, 55.0),
    delivery: tuple[float, float] | None = (25.1, 55.1),
    **kwargs,
) -> TripRequest:
    return TripRequest(
        id=oid,
        pickup_location=Location(*pickup, address=f"Yard {oid}") if pickup else None,
        delivery_location=Location(*delivery, address=f"Site {oid}") if delivery else None,
        **kwargs,
    )


def test_each_order_yields_pickup_then_delivery() -> None:
    stops = project_stops([_order("A"), _order("B")])

    assert [stop.id for stop in stops] == ["pickup_A", "delivery_A", "pickup_B", "delivery_B"]
    assert [stop.type for stop in stops] == [StopType.PICKUP, StopType.DELIVERY] * 2
    assert [stop.estimated_duration for stop in stops] == [15, 20, 15, 20]
    assert stops[0].address == "Yard A"
    assert stops[1].address == "Site A"


def test_missing_coordinates_drop_only_that_leg() -> None:
    order = TripRequest(
        id="A",
        pickup_location=Location(None, 55.0, address="Yard"),
        delivery_location=Location(25.1, 55.1),
    )

    stops = project_stops([order, _order("B", pickup=None, delivery=None)])

    assert [stop.id for stop in stops] == ["delivery_A"]
    assert stops[0].address == "Delivery Location"


def test_priority_and_time_window() -> None:
    asap = _order("A")
    scheduled = _order("B", pickup_time_preference="scheduled", scheduled_pickup_time="2026-10-18T08:00:00Z")

    stops = project_stops([asap, scheduled])

    assert [stop.priority for stop in stops] == [
        StopPriority.ASAP,
        StopPriority.ASAP,
        StopPriority.FLEXIBLE,
        StopPriority.FLEXIBLE,
    ]
    assert stops[2].time_window is None
    assert stops[3].time_window is not None
    assert stops[3].time_window.start == stops[3].time_window.end == "2026-10-18T08:00:00Z"


def test_materials_and_customer_defaults() -> None:
    structured = _order(
        "A",
        materials=[MaterialLine(type="Cement"), MaterialLine(description="Rebar 12mm"), MaterialLine()],
        customer_name="Al Noor Contracting",
        special_instructions="Call on arrival",
    )
    bare = _order("B", material_type="Sand")
    empty = _order("C")

    stops = project_stops([structured, bare, empty])

    assert stops[0].materials == ["Cement", "Rebar 12mm"]
    assert stops[0].customer_name == "Al Noor Contracting"
    assert stops[0].notes == "Call on arrival"
    assert stops[2].materials == ["Sand"]
    assert stops[2].customer_name == "Customer"
    assert stops[4].materials == ["Materials"]
