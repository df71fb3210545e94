from datetime import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import get_clock, get_session
from app.main import app
from app.models.organization import Organization, Service
from app.models.schedule import WorkSchedule
from app.models.user import User
from app.services import availability_service
from app.services.slot_service import Slot
from conftest import clock_at, query_result

BODY = {
    "organizationId": "7",
    "professionalId": "pro-1",
    "serviceId": 3,
    "startDate": "2026-03-02",
    "endDate": "2026-03-03",
}


@pytest.fixture
def client():
    app.dependency_overrides[get_session] = lambda: MagicMock()
    app.dependency_overrides[get_clock] = lambda: clock_at(2026, 1, 5, 8, 0)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def clinic(monkeypatch):
    monkeypatch.setattr(
        availability_service, "get_organization", AsyncMock(return_value=Organization(id=7, name="Clinic"))
    )
    monkeypatch.setattr(
        availability_service,
        "get_service",
        AsyncMock(return_value=Service(id=3, organization_id=7, name="Physio", duration=60)),
    )
    monkeypatch.setattr(availability_service, "is_professional_assigned", AsyncMock(return_value=True))


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize(
    ("overrides", "detail"),
    [
        ({"professionalId": None}, "Missing required parameters: professionalId"),
        ({"organizationId": "clinic"}, "Invalid organization id"),
        ({"startDate": "2026-03-05"}, "startDate must not be after endDate"),
        ({"endDate": "2026-04-02"}, "Date range cannot exceed 30 days"),
    ],
)
def test_rejects_bad_requests(client, overrides, detail) -> None:
    response = client.post("/api/v1/available-slots", json={**BODY, **overrides})

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_rejects_malformed_json(client) -> None:
    response = client.post(
        "/api/v1/available-slots", content="not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_organization_not_found(client, monkeypatch) -> None:
    monkeypatch.setattr(availability_service, "get_organization", AsyncMock(return_value=None))

    response = client.post("/api/v1/available-slots", json=BODY)

    assert response.status_code == 404
    assert response.json()["detail"] == "Organization not found"


def test_service_not_found(client, monkeypatch, clinic) -> None:
    monkeypatch.setattr(availability_service, "get_service", AsyncMock(return_value=None))

    response = client.post("/api/v1/available-slots", json=BODY)

    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found"


def test_invalid_service_duration_is_internal(client, monkeypatch, clinic) -> None:
    monkeypatch.setattr(
        availability_service,
        "get_service",
        AsyncMock(return_value=Service(id=3, organization_id=7, name="Physio", duration=-10)),
    )

    response = client.post("/api/v1/available-slots", json=BODY)

    assert response.status_code == 500
    assert response.json()["detail"] == "Invalid service duration"


def test_specific_professional_slots(client, monkeypatch, clinic) -> None:
    monkeypatch.setattr(
        availability_service,
        "get_slots_for_professional",
        AsyncMock(side_effect=[[Slot(540, 600), Slot(600, 660)], []]),
    )

    response = client.post("/api/v1/available-slots", json=BODY)

    assert response.status_code == 200
    assert response.json() == {
        "slotsByDate": {
            "2026-03-02": [
                {"start_time": "09:00", "end_time": "10:00", "available": True},
                {"start_time": "10:00", "end_time": "11:00", "available": True},
            ],
            "2026-03-03": [],
        },
        "dateRange": {"startDate": "2026-03-02", "endDate": "2026-03-03"},
    }


def test_any_professional_slots(client, monkeypatch, clinic) -> None:
    monkeypatch.setattr(
        availability_service,
        "get_eligible_professionals",
        AsyncMock(return_value=[User(id="pro-2", organization_id=7, name="Marta")]),
    )
    monkeypatch.setattr(availability_service, "get_slots_for_professional", AsyncMock(return_value=[Slot(540, 600)]))

    response = client.post("/api/v1/available-slots", json={**BODY, "professionalId": "any"})

    assert response.status_code == 200
    assert response.json()["slotsByDate"]["2026-03-03"] == [
        {
            "start_time": "09:00",
            "end_time": "10:00",
            "available": True,
            "professional_id": "pro-2",
            "professional_name": "Marta",
        }
    ]


def test_single_day_endpoint(client, monkeypatch, clinic) -> None:
    monkeypatch.setattr(availability_service, "get_slots_for_professional", AsyncMock(return_value=[Slot(900, 960)]))

    response = client.get(
        "/api/v1/organizations/7/available-slots",
        params={"professionalId": "pro-1", "serviceId": "3", "date": "2026-03-02"},
    )

    assert response.status_code == 200
    assert response.json() == {"slots": [{"start_time": "15:00", "end_time": "16:00", "available": True}]}


def test_single_day_endpoint_requires_date(client) -> None:
    response = client.get(
        "/api/v1/organizations/7/available-slots",
        params={"professionalId": "pro-1", "serviceId": "3"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required parameters: date"


def test_single_day_endpoint_rejects_bad_organization(client) -> None:
    response = client.get(
        "/api/v1/organizations/abc/available-slots",
        params={"professionalId": "pro-1", "serviceId": "3", "date": "2026-03-02"},
    )

    assert response.status_code == 400


def test_schedule_lookup_failure_does_not_fail_the_request(client, clinic) -> None:
    weekday = WorkSchedule(id=1, user_id="pro-1", day_of_week=1, start_time=time(9, 0), end_time=time(11, 0))
    session = MagicMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock(
        side_effect=[
            query_result([]),  # vacations
            SQLAlchemyError("transient"),  # exception schedules
            query_result([weekday]),
            query_result([]),  # breaks
            query_result([]),  # appointments
            query_result([]),  # group activities
        ]
    )
    app.dependency_overrides[get_session] = lambda: session

    response = client.post("/api/v1/available-slots", json={**BODY, "endDate": "2026-03-02"})

    assert response.status_code == 200
    assert response.json()["slotsByDate"] == {
        "2026-03-02": [
            {"start_time": "09:00", "end_time": "10:00", "available": True},
            {"start_time": "10:00", "end_time": "11:00", "available": True},
        ]
    }
    session.rollback.assert_awaited_once()
