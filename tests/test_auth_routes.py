"""HTTP tests for registration, login, and logout."""

import pytest
from httpx import AsyncClient

REGISTRATION = {
    "name": "Dana",
    "email": "dana@example.com",
    "password": "long-enough-password",
    "password_confirmation": "long-enough-password",
}


class TestRegister:
    """Tests for /register."""

    async def test_form_renders(self, client: AsyncClient) -> None:
        response = await client.get("/register")

        assert response.status_code == 200
        assert 'name="password_confirmation"' in response.text

    async def test_registration_logs_the_user_in(self, client: AsyncClient) -> None:
        response = await client.post("/register", data=REGISTRATION)

        assert response.status_code == 303
        assert response.headers["location"] == "/questions"

        index = await client.get("/questions")
        assert "Welcome, Dana!" in index.text
        assert (await client.get("/questions/create")).status_code == 200

    async def test_duplicate_email_rerenders_form(
        self, client: AsyncClient, seed
    ) -> None:
        await seed.user("Dana")

        response = await client.post("/register", data=REGISTRATION)

        assert response.status_code == 422
        assert "The email has already been taken." in response.text
        assert 'value="dana@example.com"' in response.text
        assert "long-enough-password" not in response.text


class TestLogin:
    """Tests for /login."""

    async def test_form_keeps_next_target(self, client: AsyncClient) -> None:
        response = await client.get("/login", params={"next": "/questions/create"})

        assert response.status_code == 200
        assert 'name="next" value="/questions/create"' in response.text

    async def test_login_redirects_to_next(
        self, client: AsyncClient, seed, default_password: str
    ) -> None:
        await seed.user("Dana")

        response = await client.post(
            "/login",
            data={
                "email": "dana@example.com",
                "password": default_password,
                "next": "/questions/create",
            },
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/questions/create"

    @pytest.mark.parametrize(
        "target",
        [
            "//evil.example.com/",
            "/\\evil.example.com",
            "/\t/evil.example.com",
            "https://evil.example.com/",
        ],
    )
    async def test_external_next_is_ignored(
        self, client: AsyncClient, seed, default_password: str, target: str
    ) -> None:
        await seed.user("Dana")

        response = await client.post(
            "/login",
            data={
                "email": "dana@example.com",
                "password": default_password,
                "next": target,
            },
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/questions"

    async def test_wrong_password_rerenders_form(
        self, client: AsyncClient, seed
    ) -> None:
        await seed.user("Dana")

        response = await client.post(
            "/login", data={"email": "dana@example.com", "password": "nope"}
        )

        assert response.status_code == 422
        assert "These credentials do not match our records." in response.text
        assert 'value="dana@example.com"' in response.text

    async def test_redirected_visitor_sees_login_prompt(
        self, client: AsyncClient
    ) -> None:
        redirect = await client.get("/questions/create")

        page = await client.get(redirect.headers["location"])

        assert "Please log in to continue." in page.text


class TestLogout:
    """Tests for POST /logout."""

    async def test_logout_ends_session(self, client: AsyncClient, seed, login) -> None:
        await login(await seed.user("Dana"))

        response = await client.post("/logout")

        assert response.status_code == 303
        assert response.headers["location"] == "/questions"
        assert (await client.get("/questions/create")).status_code == 303

        index = await client.get("/questions")
        assert "You have been logged out." in index.text
