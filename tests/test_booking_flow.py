from __future__ import annotations

import inspect
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import replace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.controllers import booking_controller
from backend.controllers.booking_controller import router
from backend.domain.models import AssignmentFailure, FailureReason
from backend.repository.inventory_repository import InventoryRepository
from backend.services.booking_service import (
    BookingService,
    InsufficientAvailabilityError,
    InvalidRequestCountError,
)
from backend.utils.config import get_settings


def _build_test_settings(seed: int = 42):
    get_settings.cache_clear()
    return replace(get_settings(), random_occupancy_seed=seed)


def _build_test_app() -> tuple[FastAPI, InventoryRepository]:
    settings = _build_test_settings()
    repository = InventoryRepository(settings)
    booking_service = BookingService(repository=repository, settings=settings)

    app = FastAPI()
    app.include_router(router)
    app.state.repository = repository
    app.state.booking_service = booking_service
    return app, repository


def test_booking_end_to_end_flow():
    app, repository = _build_test_app()
    client = TestClient(app)

    rooms_response = client.get("/rooms")
    assert rooms_response.status_code == 200
    rooms_payload = rooms_response.json()
    assert len(rooms_payload["rooms"]) == 97
    assert rooms_payload["available_count"] == 97

    book_response = client.post("/book", json={"count": 3})
    assert book_response.status_code == 200
    book_payload = book_response.json()
    assert book_payload["booked"] == [101, 102, 103]
    assert book_payload["total_travel_time"] == 2
    assert book_payload["strategy"] == "same_floor"
    assert book_payload["message"] == "Booked 3 rooms. Total travel time: 2 minute(s)."
    assert repository.count_available() == 94

    floors_response = client.get("/floors")
    assert floors_response.status_code == 200
    floors_payload = floors_response.json()
    assert [floor["floor"] for floor in floors_payload["floors"]] == list(range(10, 0, -1))
    assert len(floors_payload["floors"][0]["rooms"]) == 7
    first_floor = floors_payload["floors"][-1]
    selected = [room["number"] for room in first_floor["rooms"] if room["selected"]]
    assert selected == [101, 102, 103]
    assert floors_payload["latest_booking"] == [101, 102, 103]

    second_response = client.post("/book", json={"count": 2})
    assert second_response.status_code == 200
    assert second_response.json()["booked"] == [104, 105]

    reset_response = client.post("/reset")
    assert reset_response.status_code == 200
    assert reset_response.json() == {"success": True}
    assert repository.count_available() == 97
    assert client.get("/floors").json()["latest_booking"] == []


@pytest.mark.parametrize("count", [0, 6])
def test_book_rejects_out_of_range_count(count):
    app, repository = _build_test_app()
    client = TestClient(app)

    response = client.post("/book", json={"count": count})

    assert response.status_code == 400
    assert repository.count_available() == 97


def test_book_rejects_non_integer_payload():
    app, _ = _build_test_app()
    client = TestClient(app)

    response = client.post("/book", json={"count": "many"})

    assert response.status_code == 422


def test_book_reports_insufficient_availability():
    app, repository = _build_test_app()
    client = TestClient(app)
    client.post("/randomize", json={"probability": 1.0})
    repository.toggle_room(707)

    response = client.post("/book", json={"count": 2})

    assert response.status_code == 409
    assert response.json()["detail"] == "Only 1 rooms available."
    assert repository.count_available() == 1


def test_book_maps_no_feasible_assignment_to_server_error(monkeypatch):
    app, repository = _build_test_app()
    client = TestClient(app)
    monkeypatch.setattr(
        "backend.services.booking_service.assign_rooms",
        lambda snapshot, count: AssignmentFailure(
            reason=FailureReason.NO_FEASIBLE_ASSIGNMENT,
            message="Could not find optimal combination.",
        ),
    )

    response = client.post("/book", json={"count": 2})

    assert response.status_code == 500
    assert repository.count_available() == 97


def test_randomize_defaults_and_validation():
    app, _ = _build_test_app()
    client = TestClient(app)

    response = client.post("/randomize")
    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert len(payload["rooms"]) == 97

    invalid = client.post("/randomize", json={"probability": 1.5})
    assert invalid.status_code == 422


def test_randomize_clears_latest_booking():
    app, _ = _build_test_app()
    client = TestClient(app)
    client.post("/book", json={"count": 1})

    client.post("/randomize", json={"probability": 0.0})

    assert client.get("/floors").json()["latest_booking"] == []


def test_toggle_room_endpoint():
    app, _ = _build_test_app()
    client = TestClient(app)

    response = client.post("/rooms/101/toggle")
    assert response.status_code == 200
    assert response.json() == {"number": 101, "floor": 1, "position": 1, "occupied": True}

    book_response = client.post("/book", json={"count": 1})
    assert book_response.json()["booked"] == [102]

    missing = client.post("/rooms/1100/toggle")
    assert missing.status_code == 404


def test_booking_service_is_built_lazily_from_repository():
    settings = _build_test_settings()
    app = FastAPI()
    app.include_router(router)
    app.state.repository = InventoryRepository(settings)
    client = TestClient(app)

    response = client.post("/book", json={"count": 1})

    assert response.status_code == 200
    assert isinstance(app.state.booking_service, BookingService)


def test_missing_services_return_service_unavailable():
    app = FastAPI()
    app.include_router(router)
    client = TestClient(app)

    assert client.get("/rooms").status_code == 503


def test_booking_service_raises_typed_errors():
    settings = _build_test_settings()
    repository = InventoryRepository(settings)
    service = BookingService(repository=repository, settings=settings)

    with pytest.raises(InvalidRequestCountError) as invalid:
        service.book(7)
    assert invalid.value.reason is FailureReason.INVALID_REQUEST_COUNT

    service.randomize(1.0)
    with pytest.raises(InsufficientAvailabilityError):
        service.book(1)


def test_concurrent_bookings_never_share_a_room():
    settings = _build_test_settings()
    repository = InventoryRepository(settings)
    service = BookingService(repository=repository, settings=settings)

    with ThreadPoolExecutor(max_workers=8) as pool:
        confirmations = list(pool.map(lambda _: service.book(3), range(20)))

    booked = [
        number
        for confirmation in confirmations
        for number in confirmation.assignment.room_numbers
    ]
    assert len(booked) == len(set(booked)) == 60
    assert repository.count_available() == 97 - 60


def test_create_app_wires_services_and_runs_startup():
    from app import create_app

    app = create_app(_build_test_settings())
    with TestClient(app) as client:
        response = client.post("/book", json={"count": 5})
        assert response.status_code == 200
        assert response.json()["booked"] == [101, 102, 103, 104, 105]
        assert response.json()["total_travel_time"] == 4


@pytest.mark.parametrize(
    "endpoint",
    [
        booking_controller.list_rooms,
        booking_controller.floor_plan,
        booking_controller.book_rooms,
        booking_controller.reset_inventory,
        booking_controller.randomize_occupancy,
        booking_controller.toggle_room,
    ],
)
def test_inventory_endpoints_run_in_threadpool(endpoint):
    # handlers wait on the inventory lock, so they must not run on the event loop
    assert not inspect.iscoroutinefunction(endpoint)


def test_floor_plan_waits_for_inventory_lock():
    settings = _build_test_settings()
    repository = InventoryRepository(settings)
    service = BookingService(repository=repository, settings=settings)
    locked = threading.Event()
    release = threading.Event()

    def hold_lock():
        with repository.exclusive():
            locked.set()
            release.wait(timeout=5)

    holder = threading.Thread(target=hold_lock)
    holder.start()
    assert locked.wait(timeout=5)
    try:
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(service.floor_plan)
            with pytest.raises(FutureTimeoutError):
                pending.result(timeout=0.2)
            release.set()
            plan = pending.result(timeout=5)
    finally:
        release.set()
        holder.join(timeout=5)

    assert len(plan["floors"]) == 10
