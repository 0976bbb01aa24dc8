"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from coursereg.api import create_app
from coursereg.config import Settings
from coursereg.store import RecordStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for an in-memory database with cheap password hashing."""
    return Settings(
        database_path=":memory:",
        bcrypt_rounds=4,
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def store() -> Iterator[RecordStore]:
    """Create an in-memory RecordStore."""
    s = RecordStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Test client for a full app backed by an in-memory database."""
    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def sign_up(client: TestClient) -> Callable[..., None]:
    """Register a student through the API; the client keeps the session cookie."""

    def _sign_up(semester: int = 1, email: str = "ada@example.com") -> None:
        response = client.post(
            "/register",
            json={
                "name": "Ada Lovelace",
                "email": email,
                "password": "analytical",
                "studentId": f"S-{email}",
                "semester": semester,
            },
        )
        assert response.status_code == 201, response.text

    return _sign_up


@pytest.fixture
def signed_in(client: TestClient, sign_up: Callable[..., None]) -> TestClient:
    """Client with a semester-3 student logged in and the catalog seeded."""
    sign_up(semester=3)
    assert client.get("/init-courses").status_code == 200
    return client


@pytest.fixture
def course_ids(signed_in: TestClient) -> dict[str, str]:
    """Map course code -> id for the seeded catalog."""
    data = signed_in.get("/courses").json()["data"]
    return {c["code"]: c["id"] for c in data["availableCourses"] + data["registeredCourses"]}
