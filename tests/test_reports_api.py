from datetime import date

API = "/api/v1"

THIS_YEAR = date.today().year


def add_project(client, headers, **overrides):
    body = {
        "name": "Rooftop", "customer_name": "Ravi Kumar", "state": "Telangana",
        "proposal_amount": 100000, "kwh": 3, "start_date": f"{THIS_YEAR}-01-15",
    }
    body.update(overrides)
    response = client.post(f"{API}/projects", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def add_chitoor(client, headers, **overrides):
    body = {"customer_name": "Venkatesh", "capacity": "2", "date_of_order": f"{THIS_YEAR}-02-01"}
    body.update(overrides)
    response = client.post(f"{API}/chitoor", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_report_for_state_and_year(client, admin_headers):
    add_project(client, admin_headers)
    add_project(client, admin_headers, state="Andhra Pradesh", kwh=5)

    report = client.get(f"{API}/reports", params={"state": "TG"}, headers=admin_headers).json()
    assert report["state"] == "Telangana"
    assert report["year"] == THIS_YEAR
    assert report["year_options"][0] == THIS_YEAR
    assert report["stats"]["total_projects"] == 1
    assert report["monthly_kwh"][0] == {"month": "January", "kwh": 3}


def test_report_year_must_be_recent(client, admin_headers):
    response = client.get(f"{API}/reports", params={"year": THIS_YEAR - 5}, headers=admin_headers)
    assert response.status_code == 400


def test_chitoor_report(client, admin_headers):
    add_chitoor(client, admin_headers)
    add_chitoor(client, admin_headers, capacity="3", project_status="Completed")
    report = client.get(f"{API}/reports", params={"state": "Chitoor"}, headers=admin_headers).json()
    assert report["stats"]["total_projects"] == 2
    assert report["stats"]["completed"] == 1
    assert report["stage_groups"] == {}
    assert report["monthly_kwh"][1]["kwh"] == 5


def test_report_hidden_state_forbidden(client, make_user, assign, auth_headers):
    user = make_user("tg@solarops.in")
    assign(user.email, states=["Telangana"], modules=["sales"])
    response = client.get(f"{API}/reports", params={"state": "Chitoor"}, headers=auth_headers(user))
    assert response.status_code == 403


def test_dashboard_includes_chitoor_without_state_filter(client, admin_headers):
    add_project(client, admin_headers)
    add_chitoor(client, admin_headers)

    view = client.get(f"{API}/dashboard", headers=admin_headers).json()
    assert view["totals"]["count"] == 2
    assert view["totals"]["kwh"] == 5
    assert view["totals"]["includes_chitoor"]
    assert [p["customer_name"] for p in view["active_projects"]] == ["Ravi Kumar"]

    filtered = client.get(f"{API}/dashboard", params={"state": "Telangana"}, headers=admin_headers).json()
    assert filtered["totals"]["count"] == 1
    assert not filtered["totals"]["includes_chitoor"]


def test_dashboard_leaves_out_chitoor_for_other_regions(client, admin_headers, make_user, assign, auth_headers):
    add_project(client, admin_headers)
    add_chitoor(client, admin_headers)
    user = make_user("tg@solarops.in")
    assign(user.email, states=["Telangana"], modules=["dashboard"])

    view = client.get(f"{API}/dashboard", headers=auth_headers(user)).json()
    assert view["totals"]["count"] == 1
    assert not view["totals"]["includes_chitoor"]


def test_dashboard_sort_option_validated(client, admin_headers):
    response = client.get(f"{API}/dashboard", params={"sort_by": "name"}, headers=admin_headers)
    assert response.status_code == 400
