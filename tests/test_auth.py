from storefront.core.config import SESSION_COOKIE_NAME


def test_register_returns_user_without_password(client, register):
    user = register(client, address={
        "street": "1 Main St", "city": "Springfield", "state": "IL", "zipCode": "62701", "country": "US",
    })
    assert user["email"] == "ada@techtreasure.io"
    assert user["firstName"] == "Ada"
    assert user["address"]["zipCode"] == "62701"
    assert "password" not in user

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["id"] == user["id"]
    assert "password" not in me.json()["user"]


def test_duplicate_email_rejected_and_original_untouched(make_client, register):
    first = make_client()
    original = register(first)

    second = make_client()
    resp = second.post("/api/auth/register", json={
        "email": "ada@techtreasure.io", "password": "another-pass", "firstName": "Eve", "lastName": "X",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists with this email"
    assert second.get("/api/auth/me").status_code == 401

    login = second.post("/api/auth/login", json={"email": "ada@techtreasure.io", "password": "secret123"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == original["id"]
    assert login.json()["user"]["firstName"] == "Ada"


def test_register_validation_errors_are_400(client):
    resp = client.post("/api/auth/register", json={
        "email": "not-an-email", "password": "123", "firstName": "A", "lastName": "B",
    })
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert "email" in detail
    assert "password" in detail


def test_login_rejects_bad_credentials(make_client, register):
    register(make_client())
    c = make_client()
    wrong = c.post("/api/auth/login", json={"email": "ada@techtreasure.io", "password": "wrong-pass"})
    assert wrong.status_code == 401
    assert wrong.json()["detail"] == "Invalid credentials"
    unknown = c.post("/api/auth/login", json={"email": "bob@techtreasure.io", "password": "secret123"})
    assert unknown.status_code == 401
    assert c.get("/api/auth/me").status_code == 401


def test_me_requires_session(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authenticated"


def test_logout_destroys_session(client, register, sessions):
    register(client)
    token = client.cookies.get(SESSION_COOKIE_NAME)
    assert token
    assert len(sessions) == 1

    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Logged out successfully"
    assert len(sessions) == 0
    assert client.get("/api/auth/me").status_code == 401

    # replaying the old cookie does not bring the session back
    client.cookies.set(SESSION_COOKIE_NAME, token)
    assert client.get("/api/auth/me").status_code == 401


def test_tampered_cookie_is_rejected(client, register):
    register(client)
    token = client.cookies.get(SESSION_COOKIE_NAME)
    client.cookies.clear()
    client.cookies.set(SESSION_COOKIE_NAME, token[:-4] + "abcd")
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/cart").status_code == 401


def test_me_404_when_user_deleted(client, register, storage):
    register(client)
    path = storage._path("users.json")
    with open(path, "w") as fh:
        fh.write("[]")
    assert client.get("/api/auth/me").status_code == 404


def test_update_profile(client, register):
    register(client)
    resp = client.patch("/api/auth/me", json={"lastName": "Byron", "password": "newsecret"})
    assert resp.status_code == 200
    assert resp.json()["user"]["lastName"] == "Byron"
    assert resp.json()["user"]["firstName"] == "Ada"

    client.post("/api/auth/logout")
    login = client.post("/api/auth/login", json={"email": "ada@techtreasure.io", "password": "newsecret"})
    assert login.status_code == 200


def test_update_profile_requires_session(client):
    assert client.patch("/api/auth/me", json={"lastName": "X"}).status_code == 401


def test_signing_in_again_replaces_the_previous_session(client, register, sessions):
    register(client)
    assert len(sessions) == 1
    for _ in range(3):
        resp = client.post("/api/auth/login", json={"email": "ada@techtreasure.io", "password": "secret123"})
        assert resp.status_code == 200
    assert len(sessions) == 1
    assert client.get("/api/auth/me").status_code == 200
