API = "/api/v1"


def add_partner(client, headers, **overrides):
    body = {"business_name": "Sun Traders", "contact_person": "Ramesh", "email": "ramesh@suntraders.in",
            "location": "Warangal"}
    body.update(overrides)
    response = client.post(f"{API}/partners", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_dealer_registration(client, admin_headers):
    missing = client.post(f"{API}/dealers", json={"business_name": "Volt Mart"}, headers=admin_headers)
    assert missing.status_code == 400
    assert "contact_person" in missing.json()["detail"]

    dealer = client.post(f"{API}/dealers", json={
        "business_name": "Volt Mart", "contact_person": "Anil", "email": "anil@voltmart.in", "city": "Nellore",
    }, headers=admin_headers).json()
    assert dealer["status"] == "Pending"
    assert dealer["registration_date"]

    active = client.patch(f"{API}/dealers/{dealer['id']}", json={"status": "Active"}, headers=admin_headers)
    assert active.json()["status"] == "Active"
    assert client.patch(f"{API}/dealers/{dealer['id']}", json={"status": "Closed"},
                        headers=admin_headers).status_code == 400
    assert client.patch(f"{API}/dealers/{dealer['id']}", json={"email": None},
                        headers=admin_headers).status_code == 400

    assert client.get(f"{API}/dealers", params={"status": "Active"}, headers=admin_headers).json()[0]["id"] \
        == dealer["id"]
    assert client.delete(f"{API}/dealers/{dealer['id']}", headers=admin_headers).status_code == 200


def test_partner_defaults(client, admin_headers):
    partner = add_partner(client, admin_headers)
    assert partner["status"] == "Active"
    assert partner["partnership_date"]

    blank = client.patch(f"{API}/partners/{partner['id']}", json={"business_name": "  "}, headers=admin_headers)
    assert blank.status_code == 400
    renamed = client.patch(f"{API}/partners/{partner['id']}", json={"distribution_area": "North Telangana"},
                           headers=admin_headers)
    assert renamed.json()["distribution_area"] == "North Telangana"


def test_bulk_orders(client, admin_headers):
    partner = add_partner(client, admin_headers)

    for body in (
        {"product": "Panel 540W", "quantity": 10},
        {"partner_id": partner["id"], "product": " ", "quantity": 10},
        {"partner_id": partner["id"], "product": "Panel 540W", "quantity": 0},
    ):
        assert client.post(f"{API}/partners/bulk-orders", json=body, headers=admin_headers).status_code == 400
    unknown = client.post(f"{API}/partners/bulk-orders", json={
        "partner_id": partner["id"] + 1, "product": "Panel 540W", "quantity": 10,
    }, headers=admin_headers)
    assert unknown.status_code == 404

    order = client.post(f"{API}/partners/bulk-orders", json={
        "partner_id": partner["id"], "product": "Panel 540W", "quantity": 120,
    }, headers=admin_headers).json()
    assert order["partner_name"] == "Sun Traders"
    assert order["status"] == "Pending"
    assert order["order_date"]

    shipped = client.patch(f"{API}/partners/bulk-orders/{order['id']}", json={"status": "Shipped"},
                           headers=admin_headers)
    assert shipped.json()["status"] == "Shipped"

    listed = client.get(f"{API}/partners/bulk-orders", params={"partner_id": partner["id"]},
                        headers=admin_headers).json()
    assert [o["id"] for o in listed] == [order["id"]]

    in_use = client.delete(f"{API}/partners/{partner['id']}", headers=admin_headers)
    assert in_use.status_code == 400
    client.delete(f"{API}/partners/bulk-orders/{order['id']}", headers=admin_headers)
    assert client.delete(f"{API}/partners/{partner['id']}", headers=admin_headers).status_code == 200


def test_partner_screens_need_operations(client, make_user, assign, auth_headers):
    user = make_user("sales@solarops.in")
    assign(user.email, states=["Telangana"], modules=["projects"])
    for path in ("dealers", "partners", "partners/bulk-orders"):
        assert client.get(f"{API}/{path}", headers=auth_headers(user)).status_code == 403
