import pytest
from fastapi.testclient import TestClient

from tripmatch.dependencies import ServiceContainer
from tripmatch.errors import StoreUnavailableError
from tripmatch.main import create_app
from tripmatch.models.domain import ApprovalStatus, DriverProfile, DriverStatus, Location, TripRequest
from tripmatch.persistence.memory import InMemoryDriverStore, InMemoryRouteStore, InMemoryTripStore
from tripmatch.services.matching import AssignmentCoordinator
from tripmatch.services.routing.service import RouteOptimizationService


def _trip(tid: str, truck_type_id: str | None = "tt-small") -> TripRequest:
    return TripRequest(
        id=tid,
        pickup_location=Location(25.0, 55.0, "Yard"),
        delivery_location=Location(25.1, 55.1, "Site"),
        material_type="Cement",
        required_truck_type_id=truck_type_id,
        quoted_price=300.0,
    )


def _driver(user_id: str, *truck_types: str, approved: bool = True) -> DriverProfile:
    return DriverProfile(
        user_id=user_id,
        preferred_truck_types=frozenset(truck_types),
        is_approved=approved,
        approval_status=ApprovalStatus.APPROVED if approved else ApprovalStatus.PENDING,
        is_available=True,
        status=DriverStatus.ONLINE,
    )


def _order_payload(oid: str, pickup: tuple[float, float], delivery: tuple[float, float]) -> dict:
    return {
        "id": oid,
        "pickup_location": {"latitude": pickup[0], "longitude": pickup[1], "address": f"Yard {oid}"},
        "delivery_location": {"latitude": delivery[0], "longitude": delivery[1], "address": f"Site {oid}"},
        "material_type": "Cement",
    }


@pytest.fixture
def services() -> ServiceContainer:
    trip_store = InMemoryTripStore(
        [_trip("trip-1"), _trip("trip-2", truck_type_id="tt-dump")],
        truck_types={"tt-small": "Small Truck", "tt-dump": "Dump Truck"},
    )
    driver_store = InMemoryDriverStore(
        [
            _driver("driver-a", "small_truck"),
            _driver("driver-b", "Small Truck (up to 3.5t)"),
            _driver("driver-c", "large"),
            _driver("driver-p", "small_truck", approved=False),
        ]
    )
    return ServiceContainer(
        routing=RouteOptimizationService(InMemoryRouteStore()),
        coordinator=AssignmentCoordinator(trip_store, driver_store),
        backend="memory",
    )


@pytest.fixture
def api_client(services: ServiceContainer) -> TestClient:
    return TestClient(create_app(services))


def test_health(api_client: TestClient) -> None:
    assert api_client.get("/api/health").json() == {"status": "ok"}

    database = api_client.get("/api/health/database").json()
    assert database["backend"] == "memory"


def test_route_lifecycle_endpoints(api_client: TestClient) -> None:
    response = api_client.post(
        "/api/routes/optimize",
        json={
            "driver_id": "driver-a",
            "orders": [_order_payload("A", (0.0, 0.01), (0.0, 0.02)), _order_payload("B", (0.0, 0.05), (0.0, 0.06))],
            "current_location": {"latitude": 0.0, "longitude": 0.0},
        },
    )
    assert response.status_code == 200
    route = response.json()
    assert [stop["id"] for stop in route["stops"]] == ["pickup_A", "pickup_B", "delivery_A", "delivery_B"]
    assert route["status"] == "pending"
    assert route["map_overlay"]["wkt"].startswith("LINESTRING")
    assert route["map_overlay"]["bounds"] == [0.0, 0.01, 0.0, 0.06]

    assert api_client.get("/api/routes/driver-a/next-stop").json()["id"] == "pickup_A"
    assert api_client.post("/api/routes/driver-a/start").status_code == 409

    accepted = api_client.post("/api/routes/driver-a/accept", json={"route_id": route["id"]})
    assert accepted.status_code == 200
    assert accepted.json()["route"]["status"] == "accepted"

    assert api_client.post("/api/routes/driver-a/start").json()["route"]["status"] == "in_progress"
    assert api_client.post("/api/routes/driver-a/stops/missing/complete").status_code == 409

    for stop_id in ["pickup_A", "pickup_B", "delivery_A", "delivery_B"]:
        completed = api_client.post(f"/api/routes/driver-a/stops/{stop_id}/complete")
        assert completed.status_code == 200

    active = api_client.get("/api/routes/driver-a/active").json()
    assert active["status"] == "completed"
    assert active["stops"] == []
    assert api_client.get("/api/routes/driver-a/next-stop").status_code == 404

    stats = api_client.get("/api/routes/stats").json()
    assert stats["total_routes_optimized"] == 1

    assert api_client.delete("/api/routes/driver-a/active").status_code == 200
    assert api_client.get("/api/routes/driver-a/active").status_code == 404


def test_optimize_rejects_single_order(api_client: TestClient) -> None:
    response = api_client.post(
        "/api/routes/optimize",
        json={"driver_id": "driver-a", "orders": [_order_payload("A", (0.0, 0.01), (0.0, 0.02))]},
    )

    assert response.status_code == 400


def test_claim_endpoint_outcomes(api_client: TestClient) -> None:
    claimed = api_client.post("/api/trips/trip-1/claim", json={"driver_id": "driver-a"})
    assert claimed.status_code == 200
    assert claimed.json()["outcome"] == "claimed"

    taken = api_client.post("/api/trips/trip-1/claim", json={"driver_id": "driver-b"})
    assert taken.status_code == 409
    assert taken.json()["detail"]["outcome"] == "already_taken"

    assert api_client.post("/api/trips/trip-2/claim", json={"driver_id": "driver-c"}).status_code == 403
    assert api_client.post("/api/trips/trip-2/claim", json={"driver_id": "driver-p"}).status_code == 403
    assert api_client.post("/api/trips/nope/claim", json={"driver_id": "driver-a"}).status_code == 404

    approval = api_client.get("/api/drivers/driver-a/approval").json()
    assert approval["can_pick_trips"] is True


def test_available_trips_and_compatibility(api_client: TestClient) -> None:
    listed = api_client.get("/api/trips/available", params={"driver_id": "driver-a"}).json()
    assert [(trip["id"], trip["is_compatible"]) for trip in listed] == [("trip-2", False), ("trip-1", True)]

    compatible = api_client.get(
        "/api/trips/available", params={"driver_id": "driver-a", "compatible_only": True}
    ).json()
    assert [trip["id"] for trip in compatible] == ["trip-1"]
    assert api_client.get("/api/trips/available", params={"compatible_only": True}).status_code == 400

    report = api_client.get("/api/trips/trip-1/compatibility", params={"driver_id": "driver-b"}).json()
    assert report["is_compatible"] is True
    assert report["required_truck_type"] == "Small Truck"


def test_driver_status_endpoint(api_client: TestClient, services: ServiceContainer) -> None:
    response = api_client.put("/api/drivers/driver-a/status", json={"status": "on_break"})

    assert response.status_code == 200
    assert services.coordinator.driver_store.get_profile("driver-a").status is DriverStatus.ON_BREAK
    assert api_client.put("/api/drivers/ghost/status", json={"status": "online"}).status_code == 404
    assert api_client.put("/api/drivers/driver-a/status", json={"status": "sleeping"}).status_code == 422


def test_store_outage_maps_to_503(
    api_client: TestClient, services: ServiceContainer, monkeypatch: pytest.MonkeyPatch
) -> None:
    def unavailable(*args, **kwargs):
        raise StoreUnavailableError("get_driver_profile")

    monkeypatch.setattr(services.coordinator.driver_store, "get_profile", unavailable)

    assert api_client.post("/api/trips/trip-1/claim", json={"driver_id": "driver-a"}).status_code == 503
