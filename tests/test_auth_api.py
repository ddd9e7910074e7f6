from solarops.models import UserRole

API = "/api/v1"


def test_register_then_login(client):
    response = client.post(f"{API}/auth/register", json={
        "email": "new@solarops.in", "password": "sunshine1", "full_name": "New Hire",
    })
    assert response.status_code == 200
    assert response.json()["roles"] == ["user"]
    assert "password" not in response.json()

    again = client.post(f"{API}/auth/register", json={"email": "new@solarops.in", "password": "x"})
    assert again.status_code == 400

    login = client.post(f"{API}/auth/login", data={"username": "new@solarops.in", "password": "sunshine1"})
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert "access_token" in login.cookies

    me = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["email"] == "new@solarops.in"


def test_login_rejects_bad_password(client, make_user):
    make_user("field@solarops.in", password="right-one")
    response = client.post(f"{API}/auth/login", data={"username": "field@solarops.in", "password": "wrong"})
    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get(f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403


def test_my_access_merges_assignments(client, make_user, assign, auth_headers):
    user = make_user("field@solarops.in")
    assign(user.email, states=["Telangana"], modules=["projects"], region_access={"Telangana": "view"})
    assign("other@solarops.in", states=["Chitoor"], modules=["finance"])

    profile = client.get(f"{API}/users/me/access", headers=auth_headers(user)).json()
    assert profile == {
        "email": "field@solarops.in",
        "is_admin": False,
        "regions": ["Telangana"],
        "modules": ["projects"],
        "region_access": {"Telangana": "view"},
    }


def test_user_admin_endpoints_need_admin(client, make_user, auth_headers):
    user = make_user("field@solarops.in")
    assert client.get(f"{API}/users", headers=auth_headers(user)).status_code == 403
    assert client.get(f"{API}/assignments", headers=auth_headers(user)).status_code == 403


def test_admin_manages_users(client, admin_headers):
    created = client.post(f"{API}/users", json={
        "email": "accounts@solarops.in", "password": "ledger123", "roles": ["finance"],
    }, headers=admin_headers).json()
    assert created["roles"] == ["finance"]

    finance_users = client.get(f"{API}/users", params={"role": "finance"}, headers=admin_headers).json()
    assert [u["email"] for u in finance_users] == ["accounts@solarops.in"]

    updated = client.put(f"{API}/users/{created['id']}", json={"full_name": "Accounts Desk"},
                         headers=admin_headers).json()
    assert updated["full_name"] == "Accounts Desk"

    assert client.delete(f"{API}/users/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/users/{created['id']}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_self(client, admin_headers):
    me = client.get(f"{API}/users/me", headers=admin_headers).json()
    assert client.delete(f"{API}/users/{me['id']}", headers=admin_headers).status_code == 400


def test_assignment_upsert_replaces_by_email(client, admin_headers):
    body = {
        "assignee_email": "Field@SolarOps.in", "assignee_name": "Field Staff",
        "assigned_states": ["Telangana"], "module_access": ["projects"],
        "region_access": {"Telangana": "view"}, "project_count": 4,
    }
    first = client.post(f"{API}/assignments", json=body, headers=admin_headers).json()
    assert first["assignee_email"] == "field@solarops.in"

    body.update(assigned_states=["Telangana", "Chitoor"], project_count=6)
    second = client.post(f"{API}/assignments", json=body, headers=admin_headers).json()
    assert second["id"] == first["id"]

    stats = client.get(f"{API}/assignments/stats", headers=admin_headers).json()
    assert stats == {"total_assignments": 1, "unique_assignees": 1, "unique_states": 2, "total_projects": 6}


def test_assignment_validation(client, admin_headers):
    base = {"assignee_email": "a@solarops.in", "assignee_name": "A"}
    assert client.post(f"{API}/assignments", json=base, headers=admin_headers).status_code == 400
    assert client.post(f"{API}/assignments", json={**base, "assigned_states": ["Goa"]},
                       headers=admin_headers).status_code == 400
    assert client.post(f"{API}/assignments", json={
        **base, "assigned_states": ["Telangana"], "module_access": ["payroll"],
    }, headers=admin_headers).status_code == 400
    assert client.post(f"{API}/assignments", json={
        **base, "assigned_states": ["Telangana"], "region_access": {"Telangana": "owner"},
    }, headers=admin_headers).status_code == 400


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200


def test_admin_role_sees_everything(client, make_user, auth_headers):
    boss = make_user("owner@solarops.in", roles=[UserRole.SUPER_ADMIN])
    profile = client.get(f"{API}/users/me/access", headers=auth_headers(boss)).json()
    assert profile["is_admin"]
    assert client.get(f"{API}/projects", headers=auth_headers(boss)).status_code == 200


def test_me_cannot_take_another_users_email(client, make_user, auth_headers):
    make_user("accounts@solarops.in")
    user = make_user("field@solarops.in")
    response = client.put(f"{API}/users/me", json={"email": "Accounts@solarops.in"}, headers=auth_headers(user))
    assert response.status_code == 400
    assert response.json()["detail"] == "A user with this email already exists."

    own = client.put(f"{API}/users/me", json={"email": "field@solarops.in", "full_name": "Field Desk"},
                     headers=auth_headers(user))
    assert own.status_code == 200
    assert own.json()["full_name"] == "Field Desk"


def test_admin_update_with_null_password_keeps_password(client, admin_headers, make_user):
    user = make_user("field@solarops.in", password="right-one")
    response = client.put(f"{API}/users/{user.id}", json={"password": None, "full_name": "Field"},
                          headers=admin_headers)
    assert response.status_code == 200

    login = client.post(f"{API}/auth/login", data={"username": "field@solarops.in", "password": "right-one"})
    assert login.status_code == 200
