from sqlmodel import select

from solarops.models import ChitoorPayment

API = "/api/v1/chitoor"


def new_project(client, headers, **overrides):
    body = {"customer_name": "Venkatesh", "capacity": "2", "date_of_order": "2025-04-02"}
    body.update(overrides)
    response = client.post(API, json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_cost_defaults_from_capacity(client, admin_headers):
    assert new_project(client, admin_headers)["project_cost"] == 148000
    assert new_project(client, admin_headers, capacity="3 kW")["project_cost"] == 205000
    assert new_project(client, admin_headers, capacity="5")["project_cost"] is None
    assert new_project(client, admin_headers, project_cost=150000)["project_cost"] == 150000


def test_status_starts_pending_and_is_validated(client, admin_headers):
    assert new_project(client, admin_headers)["project_status"] == "Pending"
    assert new_project(client, admin_headers, project_status="in progress")["project_status"] == "In Progress"
    response = client.post(API, json={"customer_name": "X", "project_status": "Lost"}, headers=admin_headers)
    assert response.status_code == 400


def test_customer_name_required(client, admin_headers):
    assert client.post(API, json={"capacity": "2"}, headers=admin_headers).status_code == 400


def test_status_moves(client, admin_headers):
    project = new_project(client, admin_headers)
    url = f"{API}/{project['id']}"
    assert client.post(f"{url}/regress-status", headers=admin_headers).status_code == 400
    moved = client.post(f"{url}/advance-status", headers=admin_headers).json()
    assert moved["project_status"] == "In Progress"
    assert moved["can_regress"]


def test_payments_track_amount_received(client, admin_headers, session):
    project = new_project(client, admin_headers)
    url = f"{API}/{project['id']}/payments"

    view = client.post(url, json={"amount": 48000, "payment_mode": "UPI", "payment_date": "2025-04-10"},
                       headers=admin_headers).json()
    assert view["amount_received"] == 48000
    assert view["balance"] == 100000
    payment_id = view["payments"][0]["id"]

    over = client.post(url, json={"amount": 100001, "payment_date": "2025-04-11"}, headers=admin_headers)
    assert over.status_code == 400

    view = client.delete(f"{url}/{payment_id}", headers=admin_headers).json()
    assert view["amount_received"] == 0
    assert view["payments"] == []
    assert session.exec(select(ChitoorPayment)).all() == []


def test_initial_row_when_no_payments_recorded(client, admin_headers):
    project = new_project(client, admin_headers, amount_received=20000)
    view = client.get(f"{API}/{project['id']}/payments", headers=admin_headers).json()
    assert view["payments"] == [{
        "id": "initial", "amount": 20000, "payment_mode": None,
        "payment_date": "2025-04-02", "is_initial": True,
    }]


def test_stats(client, admin_headers):
    new_project(client, admin_headers)
    new_project(client, admin_headers, capacity="3", project_status="Completed")
    stats = client.get(f"{API}/stats", headers=admin_headers).json()
    assert stats == {
        "total": 2, "completed": 1, "pending": 1,
        "total_revenue": 353000, "total_capacity": 5,
    }


def test_delete_removes_payments(client, admin_headers, session):
    project = new_project(client, admin_headers)
    client.post(f"{API}/{project['id']}/payments", json={"amount": 1000, "payment_date": "2025-04-10"},
                headers=admin_headers)
    assert client.delete(f"{API}/{project['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/{project['id']}", headers=admin_headers).status_code == 404
    assert session.exec(select(ChitoorPayment)).all() == []


def test_region_guard(client, make_user, assign, auth_headers):
    outsider = make_user("tg@solarops.in")
    assign(outsider.email, states=["Telangana"], modules=["projects"])
    assert client.get(API, headers=auth_headers(outsider)).status_code == 403

    insider = make_user("ctr@solarops.in")
    assign(insider.email, states=["Chitoor"], modules=["projects"])
    assert client.get(API, headers=auth_headers(insider)).status_code == 200


def test_update_rejects_null_for_required_fields(client, admin_headers):
    project = new_project(client, admin_headers)
    url = f"{API}/{project['id']}"
    assert client.patch(url, json={"customer_name": None}, headers=admin_headers).status_code == 400
    assert client.patch(url, json={"project_status": None}, headers=admin_headers).status_code == 400
    assert client.get(url, headers=admin_headers).json()["customer_name"] == "Venkatesh"


def test_locations_lookup(client, admin_headers):
    rows = client.get(f"{API}/locations", params={"search": "Chennayyagunta"}, headers=admin_headers).json()
    assert rows == [{"mandal": "Tirupati Urban", "villages": ["Chennayyagunta", "Konkachennaiahgunta"]}]


def test_approval_queue(client, admin_headers):
    first = client.post(f"{API}/approvals", json={
        "project_name": "Venkatesh 2kW", "capacity_kw": 2, "location": "Chittoor", "project_cost": 148000,
    }, headers=admin_headers).json()
    assert first["approval_status"] == "pending"
    assert first["approval_updated_at"] is None
    second = client.post(f"{API}/approvals", json={"project_name": "Lakshmi 3kW"}, headers=admin_headers).json()

    assert client.post(f"{API}/approvals", json={"capacity_kw": 2}, headers=admin_headers).status_code == 400

    approved = client.patch(f"{API}/approvals/{first['id']}", json={"approval_status": "Approved"},
                            headers=admin_headers).json()
    assert approved["approval_status"] == "approved"
    assert approved["approval_updated_at"]

    bad = client.patch(f"{API}/approvals/{second['id']}", json={"approval_status": "maybe"}, headers=admin_headers)
    assert bad.status_code == 400

    stats = client.get(f"{API}/approvals/stats", headers=admin_headers).json()
    assert stats == {"total": 2, "pending": 1, "approved": 1, "rejected": 0}

    pending = client.get(f"{API}/approvals", params={"status": "pending"}, headers=admin_headers).json()
    assert [r["id"] for r in pending] == [second["id"]]


def test_approval_decision_needs_chitoor_edit(client, admin_headers, make_user, assign, auth_headers):
    record = client.post(f"{API}/approvals", json={"project_name": "Venkatesh 2kW"}, headers=admin_headers).json()
    viewer = make_user("viewer@solarops.in")
    assign(viewer.email, states=["Chitoor"], modules=["projects"], region_access={"Chitoor": "view"})
    editor = make_user("chitoor-lead@solarops.in")
    assign(editor.email, states=["Chitoor"], modules=["projects"], region_access={"Chitoor": "edit"})

    url = f"{API}/approvals/{record['id']}"
    assert client.get(f"{API}/approvals", headers=auth_headers(viewer)).status_code == 200
    assert client.patch(url, json={"approval_status": "rejected"}, headers=auth_headers(viewer)).status_code == 403
    response = client.patch(url, json={"approval_status": "rejected"}, headers=auth_headers(editor))
    assert response.status_code == 200
    assert response.json()["approval_status"] == "rejected"
