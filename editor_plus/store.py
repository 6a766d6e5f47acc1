"""
Record Store — one keyed map (id → record) per record kind, each held in a
single option row. Every mutation is one read-modify-write of that row.
"""
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from .database import db_get_option, db_update_option
from .errors import NotFoundError
from .models import PatternRecord, RECORD_KINDS, dump_record, new_record_id, utcnow

log = logging.getLogger(__name__)


def _now() -> str:
    return utcnow().strftime("%Y-%m-%d %H:%M:%S")


class RecordStore:
    """Typed access to the four record maps. Built per request from a session."""

    def __init__(self, db: Session):
        self.db = db

    # ── Raw maps ──────────────────────────────────────────────────────────

    def _load(self, kind: str) -> Dict[str, dict]:
        data = db_get_option(self.db, RECORD_KINDS[kind].option, {})
        return data if isinstance(data, dict) else {}

    def _dump(self, kind: str, data: Dict[str, dict]) -> None:
        db_update_option(self.db, RECORD_KINDS[kind].option, data)

    # ── Reads ─────────────────────────────────────────────────────────────

    def list(self, kind: str) -> dict:
        model = RECORD_KINDS[kind].model
        return {rid: model.model_validate({**raw, "id": rid}) for rid, raw in self._load(kind).items()}

    def get(self, kind: str, record_id: str):
        raw = self._load(kind).get(record_id)
        if raw is None:
            return None
        return RECORD_KINDS[kind].model.model_validate({**raw, "id": record_id})

    def enabled(self, kind: str) -> list:
        return [r for r in self.list(kind).values() if r.enabled]

    # ── Writes ────────────────────────────────────────────────────────────

    def save(self, kind: str, record):
        """Insert or overwrite by id. Keeps created_at, refreshes modified_at."""
        data = self._load(kind)
        existing = data.get(record.id)

        if kind == "pattern":
            now = _now()
            created = (existing or {}).get("created_at") or record.created_at or now
            slug = self.unique_slug(record.slug, exclude_id=record.id, patterns=data)
            record = record.model_copy(update={"slug": slug, "created_at": created, "modified_at": now})

        data[record.id] = dump_record(record)
        self._dump(kind, data)
        log.info("%s %s — %s", "Updated" if existing else "Created", kind, record.id)
        return record

    def delete(self, kind: str, record_id: str) -> bool:
        data = self._load(kind)
        if record_id not in data:
            return False
        del data[record_id]
        self._dump(kind, data)
        log.info("Deleted %s — %s", kind, record_id)
        return True

    def toggle(self, kind: str, record_id: str) -> bool:
        """Flip `enabled`; returns the new value. Missing id → NotFoundError, nothing written."""
        data = self._load(kind)
        if record_id not in data:
            raise NotFoundError(kind, record_id)
        enabled = not bool(data[record_id].get("enabled"))
        data[record_id]["enabled"] = enabled
        self._dump(kind, data)
        log.info("Toggled %s %s → %s", kind, record_id, "on" if enabled else "off")
        return enabled

    # ── Patterns ──────────────────────────────────────────────────────────

    def slug_exists(self, slug: str, exclude_id: str = "", patterns: Optional[Dict[str, dict]] = None) -> bool:
        patterns = self._load("pattern") if patterns is None else patterns
        return any(rid != exclude_id and raw.get("slug") == slug for rid, raw in patterns.items())

    def unique_slug(self, slug: str, exclude_id: str = "", patterns: Optional[Dict[str, dict]] = None) -> str:
        """First of `slug`, `slug-1`, `slug-2`… that no other pattern uses."""
        patterns = self._load("pattern") if patterns is None else patterns
        candidate, n = slug, 1
        while self.slug_exists(candidate, exclude_id, patterns):
            candidate = f"{slug}-{n}"
            n += 1
        return candidate

    def duplicate_pattern(self, record_id: str) -> PatternRecord:
        original = self.get("pattern", record_id)
        if original is None:
            raise NotFoundError("pattern", record_id)
        copy = original.model_copy(update={
            "id":          new_record_id("pattern"),
            "slug":        f"{original.slug}-copy",
            "title":       f"{original.title} (Copy)",
            "enabled":     False,
            "created_at":  None,
            "modified_at": None,
        })
        log.info("Duplicating pattern %s", record_id)
        return self.save("pattern", copy)
