"""
API tests for the contracts, spaces and parking routers
"""
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from shared.utils.app_status_code import AppStatusCode
from leasing_service.app.enum.notification_enum import NotificationType


def register_space(client, owner, **extra):
    body = {
        "name": "Harbour View 2F",
        "area": "120",
        "price_per_month": "3600",
        "space_type": "OFFICE",
        "owner_id": str(owner.id),
    }
    body.update(extra)
    response = client.post("/api/spaces/", json=body)
    assert response.status_code == 200, response.text
    return response.json()["data"]


def create_contract(client, space_id, tenant, **extra):
    today = date.today()
    body = {
        "space_id": space_id,
        "tenant_id": str(tenant.id),
        "start_date": today.isoformat(),
        "end_date": (today + timedelta(days=365)).isoformat(),
        "monthly_rent": "3600",
        "security_deposit": "7200",
    }
    body.update(extra)
    return client.post("/api/contracts/", json=body)


def test_register_and_fetch_space(client, owner, sink):
    space = register_space(client, owner)
    assert space["available"] is True
    assert Decimal(space["price_per_square_meter"]) == Decimal("30.00")
    assert sink.types() == [NotificationType.NEW_SPACE]

    fetched = client.get(f"/api/spaces/{space['id']}").json()
    assert fetched["status"] == "Success"
    assert fetched["data"]["name"] == "Harbour View 2F"

    available = client.get("/api/spaces/available").json()["data"]
    assert [s["id"] for s in available] == [space["id"]]


def test_contract_flow(client, owner, tenant, sink):
    space = register_space(client, owner)

    response = create_contract(client, space["id"], tenant)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status_code"] == AppStatusCode.CREATED_SUCCESSFULLY
    contract = body["data"]
    assert contract["status"] == "ACTIVE"
    assert contract["is_active"] is True

    space_now = client.get(f"/api/spaces/{space['id']}").json()["data"]
    assert space_now["available"] is False
    assert space_now["active_contract_id"] == contract["id"]

    again = create_contract(client, space["id"], tenant)
    assert again.status_code == 409
    assert again.json()["status"] == "Failure"
    assert again.json()["status_code"] == AppStatusCode.CONFLICT

    terminated = client.post(f"/api/contracts/{contract['id']}/terminate",
                             json={"reason": "tenant moved out"})
    assert terminated.status_code == 200
    assert terminated.json()["data"]["status"] == "TERMINATED"
    assert terminated.json()["data"]["actual_end_date"] == date.today().isoformat()
    assert client.get(f"/api/spaces/{space['id']}").json()["data"]["available"] is True

    assert NotificationType.SPACE_STATUS_CHANGE in sink.types()
    assert sink.types().count(NotificationType.NEW_CONTRACT) == 2


def test_renew_returns_both_contracts(client, owner, tenant):
    space = register_space(client, owner)
    contract = create_contract(client, space["id"], tenant).json()["data"]
    new_end = (date.today() + timedelta(days=730)).isoformat()

    response = client.post(f"/api/contracts/{contract['id']}/renew", json={"end_date": new_end})
    assert response.status_code == 200, response.text
    data = response.json()["data"]
    assert data["previous"]["status"] == "RENEWED"
    assert data["contract"]["status"] == "ACTIVE"
    assert data["contract"]["renewed_from_id"] == contract["id"]
    assert data["contract"]["end_date"] == new_end
    assert Decimal(data["contract"]["monthly_rent"]) == Decimal("3600")


def test_pending_activate_and_cancel(client, owner, tenant):
    space = register_space(client, owner)
    contract = create_contract(client, space["id"], tenant, status="PENDING").json()["data"]
    assert contract["status"] == "PENDING"

    activated = client.post(f"/api/contracts/{contract['id']}/activate")
    assert activated.json()["data"]["is_paid"] is True

    again = client.post(f"/api/contracts/{contract['id']}/activate")
    assert again.status_code == 409
    assert again.json()["status_code"] == AppStatusCode.INVALID_STATE_TRANSITION

    cancelled = client.post(f"/api/contracts/{contract['id']}/cancel", json={"reason": "budget"})
    assert cancelled.json()["data"]["status"] == "CANCELLED"
    assert client.get(f"/api/spaces/{space['id']}").json()["data"]["available"] is True


def test_expire_past_contract(client, owner, tenant):
    space = register_space(client, owner)
    contract = create_contract(client, space["id"], tenant,
                               start_date="2020-01-01", end_date="2020-12-31").json()["data"]

    response = client.post(f"/api/contracts/{contract['id']}/expire")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "EXPIRED"
    assert response.json()["data"]["actual_end_date"] == "2020-12-31"


def test_list_contracts_needs_a_filter(client, owner, tenant):
    space = register_space(client, owner)
    create_contract(client, space["id"], tenant)

    missing = client.get("/api/contracts/")
    assert missing.status_code == 400
    assert missing.json()["status_code"] == AppStatusCode.REQUIRED_VALIDATION_ERROR

    by_tenant = client.get("/api/contracts/", params={"tenant_id": str(tenant.id)}).json()["data"]
    assert by_tenant["total"] == 1

    by_status = client.get("/api/contracts/", params={"status": "terminated"}).json()["data"]
    assert by_status["total"] == 0

    bad_status = client.get("/api/contracts/", params={"status": "nope"})
    assert bad_status.status_code == 400
    assert bad_status.json()["status_code"] == AppStatusCode.INVALID_INPUT


def test_unknown_contract_is_404(client):
    response = client.get(f"/api/contracts/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["status_code"] == AppStatusCode.NOT_FOUND


def test_invalid_payload_is_rejected(client, owner, tenant):
    space = register_space(client, owner)

    inverted = create_contract(client, space["id"], tenant,
                               start_date="2024-12-31", end_date="2024-01-01")
    assert inverted.status_code == 400
    assert inverted.json()["status_code"] == AppStatusCode.INVALID_INPUT

    malformed = create_contract(client, "not-a-uuid", tenant)
    assert malformed.status_code == 422


def test_parking_endpoints(client, owner):
    facility = client.post("/api/parking/", json={"number_of_spots": 10, "covered": True}).json()["data"]
    assert facility["quality_score"] == 65

    reserved = client.post(f"/api/parking/{facility['id']}/reserve", json={"spots": 5})
    assert reserved.json()["data"]["reserved_spots"] == 5

    over = client.post(f"/api/parking/{facility['id']}/reserve", json={"spots": 10})
    assert over.status_code == 409
    assert over.json()["status_code"] == AppStatusCode.CAPACITY_EXCEEDED
    assert client.get(f"/api/parking/{facility['id']}").json()["data"]["reserved_spots"] == 5

    released = client.post(f"/api/parking/{facility['id']}/release", json={"spots": 2})
    assert released.json()["data"]["available_spots"] == 7

    space = register_space(client, owner)
    attached = client.put(f"/api/spaces/{space['id']}/parking", json={"parking_id": facility["id"]})
    assert attached.status_code == 200
    assert attached.json()["data"]["parking"]["id"] == facility["id"]
