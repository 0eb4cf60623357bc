"""End-to-end tests of the HTTP surface.

The app runs its real lifespan against a per-test SQLite file; only the
external catalog is replaced by FakeCatalogClient.
"""

from __future__ import annotations

import time

import jwt

from pokecatch.core.config import settings


class TestRegisterAndLogin:

    def test_register_then_login(self, client):
        response = client.post("/register", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 200
        assert response.json() == {"message": "a@x.com created successfully"}

        response = client.post("/login", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        payload = jwt.decode(body["token"], settings.auth.jwt_secret, algorithms=["HS256"])
        assert set(payload) == {"sub", "exp"}

    def test_duplicate_registration_is_400(self, client):
        client.post("/register", json={"email": "a@x.com", "password": "pw1"})

        response = client.post("/register", json={"email": "a@x.com", "password": "pw2"})

        assert response.status_code == 400
        assert response.json() == {"message": "Email already exists"}

    def test_login_unknown_email_is_404(self, client):
        response = client.post("/login", json={"email": "ghost@x.com", "password": "pw1"})

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_login_wrong_password_is_401(self, client):
        client.post("/register", json={"email": "a@x.com", "password": "pw1"})

        response = client.post("/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_missing_fields_are_400(self, client):
        response = client.post("/register", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert "password" in response.json()["message"]


class TestPokemonLookup:

    def test_known_pokemon_is_passed_through(self, client, fake_catalog):
        response = client.get("/pokemon/pikachu")

        assert response.status_code == 200
        assert response.json() == {"data": fake_catalog.entries["pikachu"]}
        assert fake_catalog.calls == ["pikachu"]

    def test_unknown_pokemon_is_404(self, client):
        response = client.get("/pokemon/missingno")

        assert response.status_code == 404
        assert response.json() == {"message": "Pokemon not found"}


class TestProtectedRoutes:

    def test_requires_bearer_token(self, client):
        for method, path in [
            ("GET", "/protected/caught"),
            ("POST", "/protected/catch"),
            ("DELETE", "/protected/release/1"),
        ]:
            response = client.request(method, path, json={"name": "eevee"})

            assert response.status_code == 401, path
            assert response.json() == {"message": "Unauthorized"}
            assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_expired_token(self, client, register_and_login):
        register_and_login()
        expired = jwt.encode(
            {"sub": "1", "exp": int(time.time()) - 10},
            settings.auth.jwt_secret,
            algorithm="HS256",
        )

        response = client.get("/protected/caught", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 401

    def test_catch_returns_new_ownership(self, client, register_and_login):
        headers = register_and_login()

        first = client.post("/protected/catch", json={"name": "pidgey"}, headers=headers)
        second = client.post("/protected/catch", json={"name": "pidgey"}, headers=headers)

        assert first.status_code == 200
        assert first.json()["message"] == "Pokemon caught"
        first_data, second_data = first.json()["data"], second.json()["data"]
        assert first_data["id"] != second_data["id"]
        assert first_data["pokemonId"] == second_data["pokemonId"]
        assert set(first_data) == {"id", "userId", "pokemonId", "createdAt"}

    def test_caught_pagination(self, client, register_and_login):
        headers = register_and_login()
        ids = [
            client.post("/protected/catch", json={"name": name}, headers=headers).json()["data"]["id"]
            for name in ("bulbasaur", "charmander", "squirtle")
        ]

        response = client.get("/protected/caught?page=2&perPage=1", headers=headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["id"] for item in data] == [ids[1]]
        assert data[0]["pokemon"]["name"] == "charmander"
        assert set(data[0]) == {"id", "userId", "pokemonId", "createdAt", "pokemon"}

    def test_invalid_pagination_falls_back_to_defaults(self, client, register_and_login):
        headers = register_and_login()
        for _ in range(3):
            client.post("/protected/catch", json={"name": "rattata"}, headers=headers)

        response = client.get("/protected/caught?page=abc&perPage=-2", headers=headers)

        assert response.status_code == 200
        assert len(response.json()["data"]) == 3

    def test_release_other_users_catch_reports_success_but_keeps_it(
        self, client, register_and_login
    ):
        ash = register_and_login("ash@x.com", "pw1")
        gary = register_and_login("gary@x.com", "pw2")
        ownership_id = client.post(
            "/protected/catch", json={"name": "eevee"}, headers=ash
        ).json()["data"]["id"]

        response = client.delete(f"/protected/release/{ownership_id}", headers=gary)

        assert response.status_code == 200
        assert response.json() == {"message": "Pokemon released"}
        remaining = client.get("/protected/caught", headers=ash).json()["data"]
        assert [item["id"] for item in remaining] == [ownership_id]

    def test_release_non_numeric_id_is_noop_success(self, client, register_and_login):
        headers = register_and_login()
        client.post("/protected/catch", json={"name": "eevee"}, headers=headers)

        response = client.delete("/protected/release/not-a-number", headers=headers)

        assert response.status_code == 200
        assert len(client.get("/protected/caught", headers=headers).json()["data"]) == 1

    def test_release_id_too_large_for_database_is_noop_success(self, client, register_and_login):
        headers = register_and_login()
        client.post("/protected/catch", json={"name": "eevee"}, headers=headers)

        response = client.delete("/protected/release/99999999999999999999", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Pokemon released"}
        assert len(client.get("/protected/caught", headers=headers).json()["data"]) == 1

    def test_pagination_too_large_for_database_falls_back_to_defaults(
        self, client, register_and_login
    ):
        headers = register_and_login()
        ids = [
            client.post("/protected/catch", json={"name": name}, headers=headers).json()["data"]["id"]
            for name in ("bulbasaur", "charmander")
        ]

        response = client.get(
            "/protected/caught?page=99999999999999999999&perPage=99999999999999999999",
            headers=headers,
        )

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["data"]] == ids


def test_concrete_scenario(client):
    """register → duplicate → login → unauthenticated list → catch → release → empty list."""

    assert client.post("/register", json={"email": "a@x.com", "password": "pw1"}).status_code == 200
    assert client.post("/register", json={"email": "a@x.com", "password": "pw1"}).status_code == 400

    login = client.post("/login", json={"email": "a@x.com", "password": "pw1"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    assert client.get("/protected/caught").status_code == 401

    caught = client.post("/protected/catch", json={"name": "eevee"}, headers=headers)
    assert caught.status_code == 200
    ownership_id = caught.json()["data"]["id"]

    released = client.delete(f"/protected/release/{ownership_id}", headers=headers)
    assert released.status_code == 200

    listing = client.get("/protected/caught", headers=headers)
    assert listing.status_code == 200
    assert listing.json() == {"data": []}


class TestCrossCutting:

    def test_cors_allows_any_origin(self, client):
        response = client.options(
            "/login",
            headers={
                "Origin": "https://trainer.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type, Authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        allowed_methods = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "DELETE"):
            assert method in allowed_methods

    def test_simple_request_gets_cors_header(self, client):
        response = client.get("/pokemon/pikachu", headers={"Origin": "https://trainer.example"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_health_reports_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    def test_openapi_marks_only_protected_routes(self, client):
        schema = client.get("/openapi.json").json()

        assert "BearerAuth" in schema["components"]["securitySchemes"]
        assert schema["paths"]["/protected/caught"]["get"]["security"] == [{"BearerAuth": []}]
        assert "security" not in schema["paths"]["/login"]["post"]
