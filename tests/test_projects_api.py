from sqlmodel import select

from solarops.core.constants import PROJECT_STAGES
from solarops.models import PaymentHistory, Project, UserRole

API = "/api/v1/projects"


def new_project(client, headers, **overrides):
    body = {
        "name": "Rooftop 3kW",
        "customer_name": "Ravi Kumar",
        "state": "TG",
        "project_type": "DCR",
        "payment_mode": "Cash",
        "proposal_amount": 100000,
        "advance_payment": 20000,
        "kwh": 3,
        "start_date": "2025-01-05",
    }
    body.update(overrides)
    response = client.post(API, json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_sets_defaults(client, admin_headers):
    project = new_project(client, admin_headers)
    assert project["state"] == "Telangana"
    assert project["status"] == "active"
    assert project["current_stage"] == PROJECT_STAGES[0]
    assert project["paid_amount"] == 0
    assert project["balance_amount"] == 80000


def test_create_requires_fields(client, admin_headers):
    response = client.post(API, json={"name": "No customer"}, headers=admin_headers)
    assert response.status_code == 400
    assert "customer_name" in response.json()["detail"]
    assert "proposal_amount" in response.json()["detail"]


def test_create_rejects_unknown_payment_mode(client, admin_headers):
    response = client.post(API, json={
        "name": "X", "customer_name": "Y", "proposal_amount": 10, "payment_mode": "Barter",
    }, headers=admin_headers)
    assert response.status_code == 400


def test_payment_updates_balance(client, admin_headers):
    project = new_project(client, admin_headers)
    response = client.post(f"{API}/{project['id']}/payments", json={
        "amount": 30000, "payment_mode": "UPI", "payment_date": "2025-02-01",
    }, headers=admin_headers)
    assert response.status_code == 200
    view = response.json()
    assert view["paid_amount"] == 30000
    assert view["balance_amount"] == 50000
    assert [row["id"] for row in view["payments"]][0] == "advance"
    assert view["payments"][1]["amount"] == 30000


def test_overpayment_is_rejected_without_writing(client, admin_headers, session):
    project = new_project(client, admin_headers)
    response = client.post(f"{API}/{project['id']}/payments", json={
        "amount": 80001, "payment_mode": "UPI", "payment_date": "2025-02-01",
    }, headers=admin_headers)
    assert response.status_code == 400
    assert session.exec(select(PaymentHistory)).all() == []
    assert session.get(Project, project["id"]).paid_amount == 0


def test_zero_payment_is_rejected(client, admin_headers):
    project = new_project(client, admin_headers)
    response = client.post(f"{API}/{project['id']}/payments", json={
        "amount": 0, "payment_mode": "UPI", "payment_date": "2025-02-01",
    }, headers=admin_headers)
    assert response.status_code == 400


def test_delete_payment_reverts_totals(client, admin_headers):
    project = new_project(client, admin_headers)
    view = client.post(f"{API}/{project['id']}/payments", json={
        "amount": 10000, "payment_mode": "UPI", "payment_date": "2025-02-01",
    }, headers=admin_headers).json()
    payment_id = view["payments"][-1]["id"]

    response = client.delete(f"{API}/{project['id']}/payments/{payment_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["paid_amount"] == 0
    assert response.json()["balance_amount"] == 80000

    response = client.delete(f"{API}/{project['id']}/payments/advance", headers=admin_headers)
    assert response.status_code == 400


def test_advance_receipt(client, admin_headers):
    project = new_project(client, admin_headers)
    response = client.get(f"{API}/{project['id']}/payments/advance/receipt", headers=admin_headers)
    assert response.status_code == 200
    receipt = response.json()
    assert receipt["amount"] == 20000
    assert receipt["amount_in_words"] == "Twenty Thousand Rupees Only"
    assert receipt["payment_mode"] == "Cash"
    assert receipt["received_from"] == "Ravi Kumar"
    assert receipt["receipt_date"] == "2025-01-05"


def test_stage_moves_stop_at_bounds(client, admin_headers):
    project = new_project(client, admin_headers)
    url = f"{API}/{project['id']}"

    assert client.post(f"{url}/regress-stage", headers=admin_headers).status_code == 400

    moved = client.post(f"{url}/advance-stage", headers=admin_headers).json()
    assert moved["current_stage"] == PROJECT_STAGES[1]
    assert moved["can_regress"]

    client.patch(url, json={"current_stage": PROJECT_STAGES[-1]}, headers=admin_headers)
    response = client.post(f"{url}/advance-stage", headers=admin_headers)
    assert response.status_code == 400
    stage = client.get(f"{url}/stage", headers=admin_headers).json()
    assert stage["progress"] == 100
    assert not stage["can_advance"]


def test_soft_delete_hides_project(client, admin_headers, session):
    project = new_project(client, admin_headers)
    assert client.delete(f"{API}/{project['id']}", headers=admin_headers).status_code == 200

    assert client.get(f"{API}/{project['id']}", headers=admin_headers).status_code == 404
    assert client.get(API, headers=admin_headers).json() == []
    assert session.get(Project, project["id"]).status == "deleted"


def test_toggle_status(client, admin_headers):
    project = new_project(client, admin_headers)
    toggled = client.post(f"{API}/{project['id']}/toggle-status", headers=admin_headers).json()
    assert toggled["status"] == "completed"
    toggled = client.post(f"{API}/{project['id']}/toggle-status", headers=admin_headers).json()
    assert toggled["status"] == "active"


def test_list_filters(client, admin_headers):
    new_project(client, admin_headers, customer_name="Ravi Kumar")
    new_project(client, admin_headers, customer_name="Lakshmi Rao", state="AP")

    names = [p["customer_name"] for p in client.get(API, params={"state": "AP"}, headers=admin_headers).json()]
    assert names == ["Lakshmi Rao"]

    found = client.get(API, params={"filter": "customer_name:rao"}, headers=admin_headers).json()
    assert [p["customer_name"] for p in found] == ["Lakshmi Rao"]

    found = client.get(API, params={"search": "ravi"}, headers=admin_headers).json()
    assert [p["customer_name"] for p in found] == ["Ravi Kumar"]

    response = client.get(API, params={"filter": "colour:red"}, headers=admin_headers)
    assert response.status_code == 400


def test_region_restricted_user_sees_own_region_only(client, admin_headers, make_user, assign, auth_headers):
    new_project(client, admin_headers, customer_name="Ravi Kumar")
    other = new_project(client, admin_headers, customer_name="Lakshmi Rao", state="AP")

    user = make_user("field@solarops.in")
    assign(user.email, states=["Telangana"], modules=["projects"], region_access={"Telangana": "view"})
    headers = auth_headers(user)

    listed = client.get(API, headers=headers).json()
    assert [p["customer_name"] for p in listed] == ["Ravi Kumar"]
    assert client.get(f"{API}/{other['id']}", headers=headers).status_code == 403

    response = client.post(API, json={
        "name": "Out of region", "customer_name": "Z", "proposal_amount": 1000, "state": "AP",
    }, headers=headers)
    assert response.status_code == 403


def test_view_only_user_cannot_edit(client, admin_headers, make_user, assign, auth_headers):
    project = new_project(client, admin_headers)
    viewer = make_user("viewer@solarops.in")
    assign(viewer.email, states=["Telangana"], modules=["projects"], region_access={"Telangana": "view"})
    editor = make_user("editor@solarops.in", roles=[UserRole.EDITOR])
    assign(editor.email, states=["Telangana"], modules=["projects"])

    url = f"{API}/{project['id']}"
    assert client.patch(url, json={"kwh": 4}, headers=auth_headers(viewer)).status_code == 403
    assert client.delete(url, headers=auth_headers(viewer)).status_code == 403

    response = client.patch(url, json={"kwh": 4}, headers=auth_headers(editor))
    assert response.status_code == 200
    assert response.json()["kwh"] == 4


def test_projects_module_required(client, make_user, assign, auth_headers):
    user = make_user("noaccess@solarops.in")
    assign(user.email, states=["Telangana"], modules=["finance"])
    assert client.get(API, headers=auth_headers(user)).status_code == 403


def test_unauthenticated(client):
    assert client.get(API).status_code == 401


def test_region_editor_can_edit_lowercase_state(client, make_user, assign, auth_headers, session):
    project = Project(name="Legacy import", customer_name="Suresh", state="telangana", proposal_amount=50000)
    session.add(project)
    session.commit()
    session.refresh(project)

    user = make_user("field@solarops.in")
    assign(user.email, states=["Telangana"], modules=["projects"], region_access={"Telangana": "edit"})
    response = client.patch(f"{API}/{project.id}", json={"kwh": 2}, headers=auth_headers(user))
    assert response.status_code == 200, response.text
    assert response.json()["kwh"] == 2


def test_create_stores_canonical_state(client, admin_headers):
    assert new_project(client, admin_headers, state="andhra pradesh")["state"] == "Andhra Pradesh"


def test_update_rejects_null_for_required_fields(client, admin_headers):
    project = new_project(client, admin_headers)
    url = f"{API}/{project['id']}"

    response = client.patch(url, json={"proposal_amount": None}, headers=admin_headers)
    assert response.status_code == 400
    assert "proposal_amount" in response.json()["detail"]
    assert client.patch(url, json={"customer_name": None}, headers=admin_headers).status_code == 400

    # nullable columns can still be cleared
    cleared = client.patch(url, json={"kwh": None}, headers=admin_headers)
    assert cleared.status_code == 200
    assert cleared.json()["kwh"] is None
