"""
GET  /api/nonce?action=…     → nonce for one admin action
POST /api/admin/uninstall    → delete every stored option
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db, uninstall
from ..auth import ADMIN_NONCE, NONCE_ACTIONS, create_nonce, require_nonce, require_operator
from ..responses import ok

log = logging.getLogger(__name__)
router = APIRouter(tags=["Admin"])


@router.get("/api/nonce")
def get_nonce(action: str = Query(...), token: str = Depends(require_operator)):
    if action not in NONCE_ACTIONS:
        raise HTTPException(400, "Unknown action.")
    return ok({"action": action, "nonce": create_nonce(action, token)})


@router.post("/api/admin/uninstall")
def uninstall_all(db: Session = Depends(get_db), _: str = Depends(require_nonce(ADMIN_NONCE))):
    removed = uninstall(db)
    log.warning("Uninstall requested — %d options removed", len(removed))
    return ok({"removed": removed}, "All data removed.")
