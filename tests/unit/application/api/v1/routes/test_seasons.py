"""HTTP tests for the season routes, gate and error envelope."""

import pytest
from dishka import provide
from fastapi.testclient import TestClient

from ht6.application.api.rest.app import create_app
from ht6.application.di import create_container
from ht6.config import Config, DatabaseConfig, Server
from ht6.domain.auth.model.role import Role
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.domain.season.port.repository import SeasonRepository
from ht6.domain.shared.error import DatabaseError, ErrorDetail
from ht6.util.di.base import Provider
from ht6.util.di.scope import Scope

ADMIN = {"Authorization": "Bearer admin-1"}
HACKER = {"Authorization": "Bearer hacker-1"}


class FakeMembershipProvider(Provider):
    def __init__(self, membership_repo) -> None:
        super().__init__()
        self.membership_repo = membership_repo

    @provide(scope=Scope.APP)
    def get_membership_repo(self) -> MembershipRepository:
        return self.membership_repo


class BrokenSeasonRepository:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def create(self, season_code):
        raise self.error

    async def get(self, season_code):
        raise self.error


class BrokenSeasonProvider(Provider):
    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error

    @provide(scope=Scope.UOW)
    def get_season_repo(self) -> SeasonRepository:
        return BrokenSeasonRepository(self.error)


def _config(env: str = "test") -> Config:
    return Config(
        server=Server(env=env),
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
    )


def _client(config: Config, *overrides: Provider) -> TestClient:
    container = create_container(config, *overrides)
    return TestClient(create_app(config, container))


@pytest.fixture
def client(membership_repo):
    membership_repo.grant(Role.ADMIN, "admin-1")
    membership_repo.grant(Role.HACKER, "hacker-1", "S26")
    with _client(_config(), FakeMembershipProvider(membership_repo)) as client:
        yield client


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCreateSeason:
    def test_admin_creates_season(self, client):
        response = client.post("/api/v1/seasons", json={"season_code": "S26"}, headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"message": "success"}

    def test_duplicate_is_conflict(self, client):
        client.post("/api/v1/seasons", json={"season_code": "S26"}, headers=ADMIN)

        response = client.post("/api/v1/seasons", json={"season_code": "S26"}, headers=ADMIN)

        assert response.status_code == 409
        error = response.json()["error"][0]
        assert error["code"] == "CONFLICT"
        assert error["message"] == "Conflicting seasonCode"
        # Admins see the details
        assert "detail" in error

    def test_anonymous_is_forbidden(self, client, membership_repo):
        response = client.post("/api/v1/seasons", json={"season_code": "S26"})

        body = response.json()
        assert response.status_code == 403
        assert body["success"] is False
        assert body["error"] == [
            {"code": "FORBIDDEN", "message": "You do not have authorization access"}
        ]
        assert membership_repo.calls == []

    def test_non_admin_is_forbidden(self, client):
        response = client.post("/api/v1/seasons", json={"season_code": "S26"}, headers=HACKER)

        assert response.status_code == 403
        assert "detail" not in response.json()["error"][0]

    def test_invalid_season_code(self, client):
        response = client.post("/api/v1/seasons", json={"season_code": "TOO_LONG"}, headers=ADMIN)

        assert response.status_code == 400
        error = response.json()["error"][0]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"] == "Invalid value for 'body.season_code'"


class TestGetSeason:
    def test_get_created_season(self, client):
        client.post("/api/v1/seasons", json={"season_code": "S26"}, headers=ADMIN)

        response = client.get("/api/v1/seasons/S26", headers=ADMIN)

        assert response.status_code == 200
        body = response.json()
        assert body["season_code"] == "S26"
        assert body["rsvp_form_id"] is None

    def test_missing_season(self, client):
        response = client.get("/api/v1/seasons/X99", headers=ADMIN)

        assert response.status_code == 404
        assert response.json()["error"][0]["code"] == "NOT_FOUND"

    def test_invalid_season_code_param(self, client):
        response = client.get("/api/v1/seasons/INVALID", headers=ADMIN)

        assert response.status_code == 400


class TestSeasonRoles:
    def test_anonymous_only_public(self, client):
        response = client.get("/api/v1/seasons/S26/roles")

        assert response.status_code == 200
        assert response.json() == {"season_code": "S26", "roles": ["public"]}

    def test_hacker_roles(self, client, membership_repo):
        response = client.get("/api/v1/seasons/S26/roles", headers=HACKER)

        assert response.json()["roles"] == ["user", "public", "hacker"]
        # One query per queried role, each at most once
        assert len(membership_repo.calls) == len(set(membership_repo.calls))

    def test_hacker_in_other_season(self, client):
        response = client.get("/api/v1/seasons/S25/roles", headers=HACKER)

        assert response.json()["roles"] == ["user", "public"]


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        response = client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json()["error"] == [{"code": "HTTP_404", "message": "Not Found"}]

    def test_dev_mode_shows_details_to_anonymous_callers(self, membership_repo):
        with _client(_config("dev"), FakeMembershipProvider(membership_repo)) as client:
            response = client.post("/api/v1/seasons", json={"season_code": "S26"})

        assert response.status_code == 403
        assert response.json()["error"][0]["detail"] == "Required role(s): admin"

    def test_unhandled_exception_for_admin(self, membership_repo):
        membership_repo.grant(Role.ADMIN, "admin-1")
        overrides = (FakeMembershipProvider(membership_repo), BrokenSeasonProvider(RuntimeError("kaboom")))

        with _client(_config(), *overrides) as client:
            response = client.get("/api/v1/seasons/S26", headers=ADMIN)

        assert response.status_code == 500
        error = response.json()["error"][0]
        assert error["code"] == "INTERNAL_SERVER_ERROR"
        assert error["detail"] == "kaboom"

    def test_database_error_is_generic_for_admin(self, membership_repo):
        membership_repo.grant(Role.ADMIN, "admin-1")
        failure = DatabaseError(
            500,
            ErrorDetail(code="UNDEFINED_TABLE", message="missing", detail="relation season"),
        )
        overrides = (FakeMembershipProvider(membership_repo), BrokenSeasonProvider(failure))

        with _client(_config(), *overrides) as client:
            response = client.get("/api/v1/seasons/S26", headers=ADMIN)

        assert response.status_code == 500
        assert response.json()["error"] == [
            {
                "code": "DATABASE_ERROR",
                "message": "A database error occurred. Contact support if the issue persists.",
            }
        ]
