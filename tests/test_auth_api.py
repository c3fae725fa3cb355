class TestAuthentication:
    def test_register_success(self, client):
        response = client.post("/auth/register", json={
            "name": "New User",
            "email": "New.User@Example.com",
            "password": "password123",
            "college": "Test College",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["email"] == "new.user@example.com"
        assert body["data"]["role"] == "student"
        assert body["data"]["token"]
        assert "password" not in body["data"]

    def test_register_duplicate_email(self, client, make_user):
        user = make_user()
        response = client.post("/auth/register", json={
            "name": "Again", "email": user.email, "password": "password123",
        })
        assert response.status_code == 400

    def test_register_validation(self, client):
        response = client.post("/auth/register", json={"name": "x", "email": "not-an-email", "password": "1"})
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_cannot_self_register_as_admin(self, client):
        response = client.post("/auth/register", json={
            "name": "Sneaky", "email": "sneaky@example.com", "password": "password123", "role": "admin",
        })
        assert response.status_code == 400

    def test_login_success(self, client, make_user):
        user = make_user()
        response = client.post("/auth/login", json={"email": user.email, "password": "password123"})
        assert response.status_code == 200
        assert response.json()["data"]["token"]

    def test_login_invalid_credentials(self, client, make_user):
        user = make_user()
        response = client.post("/auth/login", json={"email": user.email, "password": "wrong"})
        assert response.status_code == 401
        response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "wrong"})
        assert response.status_code == 401

    def test_me_requires_token(self, client):
        assert client.get("/auth/me").status_code == 401
        assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    def test_get_and_update_me(self, client, make_user):
        user = make_user()
        me = client.get("/auth/me", headers=user.headers).json()["data"]
        assert me["id"] == user.id
        assert "password" not in me

        response = client.put("/auth/me", json={"phone": "12345", "year": "3"}, headers=user.headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["phone"] == "12345"
        assert data["year"] == "3"
        assert data["name"] == user.name

    def test_profile_update_cannot_change_role(self, client, make_user):
        user = make_user()
        client.put("/auth/me", json={"role": "admin"}, headers=user.headers)
        assert client.get("/auth/me", headers=user.headers).json()["data"]["role"] == "student"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_unknown_route_is_404(self, client):
        assert client.get("/nowhere").status_code == 404
