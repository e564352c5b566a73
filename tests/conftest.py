# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from launch_deck.core.security import create_access_token
from launch_deck.core.tiers import TierModel
from launch_deck.db.session import Base
from launch_deck.db.session import get_db as app_get_session
from launch_deck.main import app as fastapi_app
from launch_deck.models import BuilderRank, Idea, Launch, User
from launch_deck.models.idea import IDEA_STATUS_VALIDATED
from launch_deck.schemas.launch import LaunchCreate
from launch_deck.services.competition import CompetitionService

TEST_DB_URL = "sqlite://"
# Explicit week for factories so tests do not depend on the clock.
TEST_WEEK = "2026-W03"

_TITLE_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def file_session_factory(tmp_path) -> Iterator[sessionmaker[Session]]:
    """Sessions on a file-backed SQLite database, each on its own connection.

    Used to interleave two transactions the way two concurrent requests would.
    """
    file_engine = create_engine(f"sqlite:///{tmp_path / 'launch_deck.db'}")
    Base.metadata.create_all(bind=file_engine)
    try:
        yield sessionmaker(bind=file_engine, autocommit=False, autoflush=False)
    finally:
        file_engine.dispose()


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def tiers() -> TierModel:
    """Default tier tables, independent of environment overrides."""
    return TierModel()


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Create a persisted participant profile."""

    def _make(username: str) -> User:
        user = User(username=username, display_name=username.title(), station_memberships=0)
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def make_builder(db_session: Session) -> Callable[..., BuilderRank]:
    """Create a BuilderRank row with the given tier."""

    def _make(username: str, tier: int = 1, **fields: Any) -> BuilderRank:
        rank = BuilderRank(
            username=username,
            tier=tier,
            shipping_points=fields.pop("shipping_points", 0),
            community_karma=fields.pop("community_karma", 0),
            trust_score=fields.pop("trust_score", 0),
            tier_score=fields.pop("tier_score", 0),
            promotion_points=fields.pop("promotion_points", 0),
            weekly_wins=0,
            monthly_wins=0,
            poten_count=0,
            **fields,
        )
        db_session.add(rank)
        db_session.commit()
        return rank

    return _make


@pytest.fixture()
def make_launch(db_session: Session, tiers: TierModel) -> Callable[..., Launch]:
    """Submit a launch through the competition service."""

    def _make(username: str = "owner", week_number: str = TEST_WEEK, **fields: Any) -> Launch:
        payload = {
            "title": f"Launch {next(_TITLE_COUNTER)}",
            "description": "A product worth trying",
            "demo_url": "https://example.com/demo",
            "week_number": week_number,
        }
        payload.update(fields)
        return CompetitionService(db_session, tiers).submit_launch(
            username, LaunchCreate(**payload)
        )

    return _make


@pytest.fixture()
def make_idea(db_session: Session) -> Callable[..., Idea]:
    def _make(author: str, status: str = IDEA_STATUS_VALIDATED) -> Idea:
        idea = Idea(
            author_username=author,
            title="An idea",
            problem="",
            solution="",
            target_audience="",
            status=status,
        )
        db_session.add(idea)
        db_session.commit()
        return idea

    return _make


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return authorization headers for a username."""

    def _headers(username: str) -> dict[str, str]:
        token = create_access_token(username)
        return {"Authorization": f"Bearer {token}"}

    return _headers
