"""Save and restore slips for session restore."""

from __future__ import annotations

import logging

from sqlalchemy import select

from parlayvig.config import get_settings
from parlayvig.db.database import get_session
from parlayvig.db.models import SavedSession
from parlayvig.session.state import ParlaySession

logger = logging.getLogger(__name__)


def save_session(state: ParlaySession, name: str | None = None) -> None:
    name = name or get_settings().session_name
    payload = state.to_dict()
    with get_session() as session:
        row = session.scalars(select(SavedSession).where(SavedSession.name == name)).first()
        if row is None:
            session.add(SavedSession(name=name, payload=payload))
        else:
            row.payload = payload
    logger.debug("Saved session %s with %d legs", name, len(state.legs))


def load_session(name: str | None = None) -> ParlaySession | None:
    """Return the saved slip, or ``None`` when nothing usable is stored."""

    name = name or get_settings().session_name
    with get_session() as session:
        row = session.scalars(select(SavedSession).where(SavedSession.name == name)).first()
        payload = row.payload if row else None
    if payload is None:
        return None
    if not isinstance(payload, dict):
        logger.warning("Discarding malformed saved session %s", name)
        return None
    return ParlaySession.from_dict(payload)


def list_sessions() -> list[str]:
    with get_session() as session:
        return list(session.scalars(select(SavedSession.name).order_by(SavedSession.name)))


def delete_session(name: str) -> bool:
    with get_session() as session:
        row = session.scalars(select(SavedSession).where(SavedSession.name == name)).first()
        if row is None:
            return False
        session.delete(row)
    return True
