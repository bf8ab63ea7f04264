"""Tests for application-level endpoints, middleware, and error pages."""

from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Verify /health returns 200 with healthy status."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "qanda"
        assert data["version"] == "0.1.0"

    async def test_request_id_header(self, client: AsyncClient) -> None:
        """Verify X-Request-ID header is present in response."""
        response = await client.get("/health")

        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36
        assert request_id.count("-") == 4


class TestHome:
    """Tests for the site root."""

    async def test_root_redirects_to_question_list(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 303
        assert response.headers["location"] == "/questions"


class TestErrorPages:
    """Tests for HTML error rendering."""

    async def test_unknown_route_renders_404_page(self, client: AsyncClient) -> None:
        response = await client.get("/nonexistent")

        assert response.status_code == 404
        assert "text/html" in response.headers["content-type"]
        assert "Not Found" in response.text

    async def test_request_id_in_error_response(self, client: AsyncClient) -> None:
        response = await client.get("/nonexistent")

        assert "X-Request-ID" in response.headers
        assert response.headers["X-Request-ID"] in response.text

    async def test_wrong_method_renders_405_page(self, client: AsyncClient) -> None:
        response = await client.put("/health")

        assert response.status_code == 405
        assert "Method Not Allowed" in response.text

    async def test_invalid_query_parameter_renders_422_page(
        self, client: AsyncClient
    ) -> None:
        response = await client.get("/questions", params={"page": 0})

        assert response.status_code == 422
        assert "The request parameters were invalid." in response.text
