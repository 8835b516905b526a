"""
Shared fixtures for the campaign marketplace API tests.

Every test gets a fresh in-memory SQLite database wired into the app
through the get_db dependency, plus helpers that sign users up and log
them in through the real routes.
"""

import os

# Must be set before the app modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import date, timedelta
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.config import get_db, init_db
from server import app

PASSWORD = "password123"


class MarketplaceTestDataFactory:
    """Builds request payloads with valid defaults"""

    @staticmethod
    def advertiser_signup(email: str = "advertiser@example.com", **overrides) -> Dict[str, Any]:
        payload = {
            "email": email,
            "password": PASSWORD,
            "name": "Kim Advertiser",
            "phone": "010-1234-5678",
            "terms_agreed": True,
            "role": "advertiser",
            "advertiser_profile": {
                "business_name": "Mapo Brunch House",
                "location": "Seoul Mapo-gu",
                "category": "Restaurant",
                "business_registration_number": "123-45-67890",
            },
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def influencer_signup(email: str = "influencer@example.com", **overrides) -> Dict[str, Any]:
        payload = {
            "email": email,
            "password": PASSWORD,
            "name": "Lee Influencer",
            "phone": "01098765432",
            "terms_agreed": True,
            "role": "influencer",
            "influencer_profile": {
                "birth_date": "1996-04-12",
                "instagram_name": "lee.eats",
                "instagram_url": "https://instagram.com/lee.eats",
                "naver_blog_url": "",
            },
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def campaign(**overrides) -> Dict[str, Any]:
        today = date.today()
        payload = {
            "title": "Weekend brunch tasting",
            "recruitment_start_date": today.isoformat(),
            "recruitment_end_date": (today + timedelta(days=7)).isoformat(),
            "recruitment_count": 5,
            "benefits": "Brunch set for two people",
            "store_info": "Open 10:00-21:00, 2 minutes from Hapjeong station",
            "mission": "Post a blog review with at least 10 photos",
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def application(campaign_id: str, **overrides) -> Dict[str, Any]:
        payload = {
            "campaign_id": campaign_id,
            "message": "I review brunch spots every weekend and would love to visit.",
            "visit_date": (date.today() + timedelta(days=3)).isoformat(),
        }
        payload.update(overrides)
        return payload


@pytest.fixture
def factory():
    return MarketplaceTestDataFactory


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client: TestClient, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Sign up through the API, log in, and return id plus auth headers."""
    role = payload["role"]
    response = client.post(f"/api/auth/signup/{role}", json=payload)
    assert response.status_code == 201, response.text
    user_id = response.json()["user_id"]

    login = client.post("/api/auth/login", json={"email": payload["email"], "password": payload["password"]})
    assert login.status_code == 200, login.text
    token = login.json()["access_token"]

    return {"id": user_id, "email": payload["email"], "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def advertiser(client, factory):
    return register(client, factory.advertiser_signup("owner@example.com"))


@pytest.fixture
def other_advertiser(client, factory):
    return register(client, factory.advertiser_signup("rival@example.com", name="Park Rival"))


@pytest.fixture
def influencer(client, factory):
    return register(client, factory.influencer_signup("creator@example.com"))


@pytest.fixture
def other_influencer(client, factory):
    return register(client, factory.influencer_signup("second@example.com", name="Choi Second"))


@pytest.fixture
def create_campaign(client, factory):
    def _create(owner: Dict[str, Any], **overrides) -> Dict[str, Any]:
        response = client.post("/api/campaigns", json=factory.campaign(**overrides), headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def apply(client, factory):
    def _apply(applicant: Dict[str, Any], campaign_id: str, **overrides) -> Dict[str, Any]:
        response = client.post(
            "/api/applications",
            json=factory.application(campaign_id, **overrides),
            headers=applicant["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _apply


@pytest.fixture
def set_status(client):
    def _set(owner: Dict[str, Any], campaign_id: str, status: str):
        return client.patch(
            f"/api/campaigns/{campaign_id}/status",
            json={"status": status},
            headers=owner["headers"],
        )
    return _set
