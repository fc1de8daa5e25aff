"""Database-backed read-through cache with per-entry TTL."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.time import expires_in, utcnow
from app.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)


@dataclass
class CacheResult:
    cached: bool
    data: Any = None


def get_from_cache(db: Session, key: str) -> CacheResult:
    """Look up ``key``; expired rows are reported as a miss."""
    entry = (
        db.query(CacheEntry)
        .filter(CacheEntry.key == key, CacheEntry.expires_at > utcnow())
        .first()
    )
    if entry is None:
        logger.debug("Cache miss for %s", key)
        return CacheResult(cached=False)
    return CacheResult(cached=True, data=json.loads(entry.value_json))


def save_to_cache(db: Session, key: str, value: Any, ttl_seconds: int) -> None:
    """Store ``value`` under ``key`` for ``ttl_seconds``, replacing any previous entry."""
    value_json = json.dumps(value)
    expires_at = expires_in(ttl_seconds)

    if _update_entry(db, key, value_json, expires_at):
        db.commit()
        return

    db.add(CacheEntry(key=key, value_json=value_json, expires_at=expires_at))
    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same key between our lookup and insert
        db.rollback()
        _update_entry(db, key, value_json, expires_at)
        db.commit()


def _update_entry(db: Session, key: str, value_json: str, expires_at) -> bool:
    existing = db.query(CacheEntry).filter(CacheEntry.key == key).first()
    if existing is None:
        return False
    existing.value_json = value_json
    existing.expires_at = expires_at
    existing.created_at = utcnow()
    return True


def clear_cache(db: Session) -> int:
    """Delete every cache entry and return how many were removed."""
    count = db.query(CacheEntry).delete()
    db.commit()
    logger.info("Cleared %d cache entries", count)
    return count


def purge_expired(db: Session) -> int:
    """Delete entries whose TTL has passed; reads already ignore them."""
    count = db.query(CacheEntry).filter(CacheEntry.expires_at <= utcnow()).delete()
    db.commit()
    return count
