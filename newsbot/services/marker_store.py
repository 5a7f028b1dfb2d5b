from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from newsbot.db.database import get_engine
from newsbot.db.models import ProcessedMarker, utcnow


def _as_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


class MarkerStore:
    """
    Key/value records with an expiry, backed by the processed_markers table.

    Expired rows read as missing; `set` overwrites them in place.
    """

    def __init__(self, engine: Engine | None = None, now: Callable[[], datetime] = utcnow) -> None:
        self.engine = engine or get_engine()
        self.now = now

    def get(self, key: str) -> str | None:
        with Session(self.engine) as session:
            row = session.get(ProcessedMarker, key)
            if row is None or row.expires_at <= self.now():
                return None
            return row.value

    def set(self, key: str, value: str, expiration: datetime) -> None:
        with Session(self.engine) as session:
            session.merge(
                ProcessedMarker(
                    key=key,
                    value=value,
                    expires_at=_as_naive_utc(expiration),
                    created_at=self.now(),
                )
            )
            session.commit()

    def expiry_after(self, days: int) -> datetime:
        return self.now() + timedelta(days=days)
