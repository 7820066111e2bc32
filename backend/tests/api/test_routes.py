"""
Tests for the HTTP API.

Runs the FastAPI app with TestClient against a temporary SQLite database
(dependency override of get_async_db). The lifespan is not started.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from noskrien.db.session import enable_sqlite_savepoints, get_async_db
from noskrien.features.participants.models import Participant, Race
from noskrien.main import app
from noskrien.models.base import Base


# =============================================================================
# Fixtures
# =============================================================================

def participant(name, distance="Tautas", gender="V", races=()):
    return Participant(
        name=name,
        distance=distance,
        gender=gender,
        season="2023-2024",
        races=[
            Race(date=date, result=result, km=km, location=location, season="2023-2024")
            for date, result, km, location in races
        ],
    )


@pytest.fixture
def db_path(tmp_path):
    """Database seeded with the Pazars / Bērziņš scenario."""
    path = tmp_path / "api.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(bind=engine)
    with Session(engine) as session:
        session.add_all([
            participant("Dāvis Pazars", races=[
                ("2023-11-26", "52:09", "10,0", "Smiltene"),
                ("2023-12-17", "1:01:59", "10,0", "Ļaudona"),
                ("2025-12-14", "38:30", "8", "Jaunolaine"),
            ]),
            participant("Kristaps Bērziņš", races=[
                ("2023-11-26", "41:02", "10,0", "Smiltene"),
                ("2023-12-17", "41:13", "10,0", "Ļaudona"),
            ]),
            participant("Davis Pazars", races=[("2024-01-13", "41:13", "10,0", "Kuldīga")]),
        ])
        session.commit()
    engine.dispose()
    return path


@pytest.fixture
def client(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    enable_sqlite_savepoints(engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_async_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Test health
# =============================================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# =============================================================================
# Test participants
# =============================================================================

class TestParticipantRoutes:
    """Tests for /api/v1/participants."""

    def test_search_folds_diacritics(self, client):
        response = client.get("/api/v1/participants/search", params={"name": "berzins"})
        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Kristaps Bērziņš"]

    def test_search_finds_all_spellings(self, client):
        response = client.get("/api/v1/participants/search", params={"name": "pazars"})
        assert [r["name"] for r in response.json()] == ["Davis Pazars", "Dāvis Pazars"]

    def test_search_short_query(self, client):
        response = client.get("/api/v1/participants/search", params={"name": "D"})
        assert response.status_code == 200
        assert response.json() == []

    def test_search_requires_name(self, client):
        assert client.get("/api/v1/participants/search").status_code == 422

    def test_history(self, client):
        response = client.get("/api/v1/participants/history", params={"name": "Dāvis Pazars"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Dāvis Pazars"
        assert [r["date"] for r in data["races"]] == ["2023-11-26", "2023-12-17", "2025-12-14"]
        assert {r["category"] for r in data["races"]} == {"Tautas"}

    def test_history_requires_name(self, client):
        assert client.get("/api/v1/participants/history").status_code == 422

    def test_participant_detail(self, client):
        response = client.get("/api/v1/participants/1")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Dāvis Pazars"
        assert [r["date"] for r in data["races"]] == ["2025-12-14", "2023-12-17", "2023-11-26"]

    def test_participant_not_found(self, client):
        assert client.get("/api/v1/participants/999").status_code == 404


# =============================================================================
# Test compare
# =============================================================================

class TestCompareRoute:
    """Tests for /api/v1/compare."""

    def test_slower_first_not_swapped(self, client):
        response = client.get(
            "/api/v1/compare",
            params={"name1": "Dāvis Pazars", "name2": "Kristaps Bērziņš"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["swapped"] is False
        assert data["category"] == "Tautas"
        assert len(data["rows"]) == 2
        assert data["rows"][0]["diff"] == pytest.approx(66.7, abs=0.05)
        assert data["summary"]["second_wins"] == 2

    def test_faster_first_is_swapped(self, client):
        response = client.get(
            "/api/v1/compare",
            params={"name1": "Kristaps Bērziņš", "name2": "Dāvis Pazars"},
        )
        data = response.json()
        assert data["swapped"] is True
        assert data["name1"] == "Dāvis Pazars"
        assert data["rows"][0]["p1_time"] == "52:09"
        assert data["rows"][0]["diff"] > 0

    def test_no_common_races(self, client):
        response = client.get(
            "/api/v1/compare",
            params={"name1": "Davis Pazars", "name2": "Kristaps Bērziņš"},
        )
        data = response.json()
        assert data["rows"] == []
        assert data["summary"]["races"] == 0

    def test_other_category(self, client):
        response = client.get(
            "/api/v1/compare",
            params={"name1": "Dāvis Pazars", "name2": "Kristaps Bērziņš", "category": "Sporta"},
        )
        assert response.json()["rows"] == []

    def test_requires_both_names(self, client):
        response = client.get("/api/v1/compare", params={"name1": "Dāvis Pazars"})
        assert response.status_code == 422


# =============================================================================
# Test migrate
# =============================================================================

class TestMigrateRoute:
    """Tests for /api/v1/migrate/latvian-duplicates."""

    def test_preview_does_not_change(self, client):
        response = client.post("/api/v1/migrate/latvian-duplicates", params={"preview": "true"})
        assert response.status_code == 200
        data = response.json()
        assert data["preview"] is True
        assert data["total_merges"] == 1
        assert data["merges"][0]["old_name"] == "Davis Pazars"
        assert data["merges"][0]["new_name"] == "Dāvis Pazars"

        search = client.get("/api/v1/participants/search", params={"name": "pazars"})
        assert len(search.json()) == 2

    def test_execute_merges(self, client):
        response = client.post("/api/v1/migrate/latvian-duplicates", params={"preview": "false"})
        assert response.status_code == 200
        data = response.json()
        assert data["updated_races"] == 1
        assert data["deleted_participants"] == 1
        assert data["backfilled_keys"] == 1  # Kristaps Bērziņš had no match key

        history = client.get("/api/v1/participants/history", params={"name": "Dāvis Pazars"})
        assert len(history.json()["races"]) == 4

        again = client.post("/api/v1/migrate/latvian-duplicates", params={"preview": "true"})
        assert again.json()["total_merges"] == 0
