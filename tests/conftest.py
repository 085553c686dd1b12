"""Shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from parlayvig.config import get_settings
from parlayvig.db import database


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch) -> Iterator[None]:
    for var in ("DEFAULT_STAKE", "DEFAULT_LEG_ODDS", "PARLAYVIG_API_KEY", "SESSION_NAME"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def memory_db(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    database.init_db(bind=engine)
    factory = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)
    monkeypatch.setattr(database, "SessionLocal", factory)
    yield engine
    engine.dispose()
