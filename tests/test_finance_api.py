import pytest

from solarops.models import UserRole

API = "/api/v1"


@pytest.fixture()
def project_id(client, admin_headers):
    response = client.post(f"{API}/projects", json={
        "name": "Farmhouse 5kW", "customer_name": "Srinivas", "state": "Telangana",
        "proposal_amount": 100000, "advance_payment": 0, "start_date": "2025-01-01",
    }, headers=admin_headers)
    return response.json()["id"]


def pay(client, headers, project_id, amount, payment_date):
    response = client.post(f"{API}/projects/{project_id}/payments", json={
        "amount": amount, "payment_mode": "Bank Transfer", "payment_date": payment_date,
    }, headers=headers)
    assert response.status_code == 200, response.text


def test_finance_role_required(client, make_user, assign, auth_headers):
    staff = make_user("staff@solarops.in")
    assign(staff.email, modules=["finance"])
    assert client.get(f"{API}/finance/summary", headers=auth_headers(staff)).status_code == 403
    assert client.get(f"{API}/tax-invoices", headers=auth_headers(staff)).status_code == 403

    accountant = make_user("accounts@solarops.in", roles=[UserRole.FINANCE])
    assign(accountant.email, modules=["finance"])
    assert client.get(f"{API}/finance/summary", headers=auth_headers(accountant)).status_code == 200


def test_summary_totals_outstanding(client, admin_headers, project_id):
    pay(client, admin_headers, project_id, 25000, "2025-02-01")
    summary = client.get(f"{API}/finance/summary", headers=admin_headers).json()
    assert summary["project_count"] == 1
    assert summary["total_outstanding"] == 75000
    # started long before the current month, so the whole balance is due
    assert summary["expected_this_month"] == 75000

    completed = client.get(f"{API}/finance/summary", params={"status": "completed"}, headers=admin_headers)
    assert completed.json()["project_count"] == 0
    bad = client.get(f"{API}/finance/summary", params={"status": "overdue"}, headers=admin_headers)
    assert bad.status_code == 400


def test_ledger_attributes_tax(client, admin_headers, project_id):
    pay(client, admin_headers, project_id, 30000, "2025-02-01")
    pay(client, admin_headers, project_id, 10000, "2025-03-01")
    response = client.post(f"{API}/estimations", json={
        "project_id": project_id, "material_cost": 50000, "project_tax": 4000,
    }, headers=admin_headers)
    assert response.json()["total_cost"] == 54000

    ledger = client.get(f"{API}/finance/payments", headers=admin_headers).json()
    assert [row["amount"] for row in ledger] == [10000, 30000]
    assert [row["attributed_tax"] for row in ledger] == [1000, 3000]
    assert ledger[0]["project_name"] == "Farmhouse 5kW"

    only_one = client.get(f"{API}/finance/payments", params={"project_id": project_id + 1},
                          headers=admin_headers).json()
    assert only_one == []


def test_estimation_needs_existing_project(client, admin_headers):
    response = client.post(f"{API}/estimations", json={"project_id": 999}, headers=admin_headers)
    assert response.status_code == 404


def test_invoice_numbers_continue_series(client, admin_headers):
    numbers = client.get(f"{API}/tax-invoices/next-numbers", headers=admin_headers).json()
    assert numbers == {"gst_number": "IN-000001", "invoice_number": "INV-000001"}

    item = {"description": "Solar panel 540W", "quantity": 2, "rate": 10000, "cgst_rate": 6, "sgst_rate": 6}
    first = client.post(f"{API}/tax-invoices", json={"customer_name": "Srinivas", "items": [item]},
                        headers=admin_headers).json()
    assert first["gst_number"] == "IN-000001"
    assert first["invoice_number"] == "INV-000001"
    assert first["invoice_date"]

    second = client.post(f"{API}/tax-invoices", json={"customer_name": "Srinivas", "items": [item]},
                         headers=admin_headers).json()
    assert second["invoice_number"] == "INV-000002"

    totals = client.get(f"{API}/tax-invoices/{first['id']}/totals", headers=admin_headers).json()
    assert totals["taxable_value"] == 20000
    assert totals["total_cgst"] == 1200
    assert totals["total_sgst"] == 1200
    assert totals["total_amount"] == 22400
    assert totals["amount_in_words"] == "Twenty Two Thousand Four Hundred Rupees Only"


def test_invoice_requires_items(client, admin_headers):
    response = client.post(f"{API}/tax-invoices", json={"customer_name": "Srinivas"}, headers=admin_headers)
    assert response.status_code == 400


def test_expenses(client, admin_headers):
    response = client.post(f"{API}/expenses", json={
        "date": "2025-05-01", "category": "Utilities", "vendor": "TSSPDCL", "amount": 1200,
    }, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["created_by"] == "admin@solarops.in"

    bad = client.post(f"{API}/expenses", json={
        "date": "2025-05-01", "category": "Parties", "amount": 10,
    }, headers=admin_headers)
    assert bad.status_code == 400

    summary = client.get(f"{API}/expenses/summary", headers=admin_headers).json()
    assert summary["total"] == 1200
    assert summary["pending"] == 1200


def test_ledger_hides_deleted_project_payments_from_region_users(
    client, admin_headers, project_id, make_user, assign, auth_headers
):
    pay(client, admin_headers, project_id, 30000, "2025-02-01")
    accountant = make_user("tg-accounts@solarops.in", roles=[UserRole.FINANCE])
    assign(accountant.email, states=["Telangana"], modules=["finance"])

    visible = client.get(f"{API}/finance/payments", headers=auth_headers(accountant)).json()
    assert [row["amount"] for row in visible] == [30000]

    assert client.delete(f"{API}/projects/{project_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/finance/payments", headers=auth_headers(accountant)).json() == []
    assert len(client.get(f"{API}/finance/payments", headers=admin_headers).json()) == 1


def test_expense_update_rejects_null_for_required_fields(client, admin_headers):
    expense = client.post(f"{API}/expenses", json={
        "date": "2025-05-01", "category": "Utilities", "amount": 1200,
    }, headers=admin_headers).json()
    url = f"{API}/expenses/{expense['id']}"
    assert client.patch(url, json={"category": None}, headers=admin_headers).status_code == 400
    assert client.patch(url, json={"tax_amount": None}, headers=admin_headers).status_code == 400
    assert client.patch(url, json={"vendor": None}, headers=admin_headers).status_code == 200
