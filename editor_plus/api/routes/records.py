"""
CRUD for the four record kinds — same four operations each:
GET    /api/<kind>              → full map
POST   /api/<kind>              → save (insert or overwrite by id)
DELETE /api/<kind>/{id}         → delete
POST   /api/<kind>/{id}/toggle  → flip enabled
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ...errors import EditorError, NotFoundError
from ...models import RECORD_KINDS, dump_record
from ...patterns import shortcode_for
from ...sanitize import sanitize
from ...store import RecordStore
from ..auth import (
    BLOCK_RULE_NONCE, PATTERNS_NONCE, SNIPPET_NONCE, VARIATION_NONCE,
    require_nonce, require_operator,
)
from ..responses import ok, to_http

log = logging.getLogger(__name__)

# kind → (url segment, nonce action)
ROUTES = {
    "pattern":    ("patterns",    PATTERNS_NONCE),
    "block_rule": ("block-rules", BLOCK_RULE_NONCE),
    "snippet":    ("snippets",    SNIPPET_NONCE),
    "variation":  ("variations",  VARIATION_NONCE),
}


async def read_payload(request: Request) -> dict:
    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(400, "Invalid JSON body.")
    if not isinstance(data, dict):
        raise HTTPException(400, "Expected a JSON object.")
    data.pop("nonce", None)
    return data


def records_router(kind: str) -> APIRouter:
    segment, action = ROUTES[kind]
    label = RECORD_KINDS[kind].label
    router = APIRouter(prefix=f"/api/{segment}", tags=[f"{label}s"])

    @router.get("")
    def list_records(db: Session = Depends(get_db), _: str = Depends(require_operator)):
        records = RecordStore(db).list(kind)
        return ok({rid: dump_record(r) for rid, r in records.items()})

    @router.post("")
    async def save_record(request: Request, db: Session = Depends(get_db),
                          _: str = Depends(require_nonce(action))):
        data = await read_payload(request)
        try:
            record = RecordStore(db).save(kind, sanitize(kind, data))
        except EditorError as e:
            raise to_http(e)
        result = {"id": record.id, "record": dump_record(record)}
        if kind == "pattern":
            result["shortcode"] = shortcode_for(record)
        return ok(result, f"{label} saved successfully.")

    @router.delete("/{record_id}")
    def delete_record(record_id: str, db: Session = Depends(get_db),
                      _: str = Depends(require_nonce(action))):
        if not RecordStore(db).delete(kind, record_id):
            raise to_http(NotFoundError(kind, record_id))
        return ok({"id": record_id}, f"{label} deleted.")

    @router.post("/{record_id}/toggle")
    def toggle_record(record_id: str, db: Session = Depends(get_db),
                      _: str = Depends(require_nonce(action))):
        try:
            enabled = RecordStore(db).toggle(kind, record_id)
        except NotFoundError as e:
            raise to_http(e)
        return ok({"id": record_id, "enabled": enabled}, f"{label} {'enabled' if enabled else 'disabled'}.")

    return router


routers = [records_router(kind) for kind in ROUTES]
