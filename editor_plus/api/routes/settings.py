"""GET|POST /api/settings — the single global settings record."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ...settings import load_settings, update_settings
from ..auth import SETTINGS_NONCE, require_nonce, require_operator
from ..responses import ok
from .records import read_payload

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("")
def get_settings(db: Session = Depends(get_db), _: str = Depends(require_operator)):
    return ok(load_settings(db).model_dump(mode="json"))


@router.post("")
async def save_settings(request: Request, db: Session = Depends(get_db),
                        _: str = Depends(require_nonce(SETTINGS_NONCE))):
    settings = update_settings(db, await read_payload(request))
    return ok(settings.model_dump(mode="json"), "Settings saved.")
