"""SQLite — init + session + option store helpers"""
import json, logging, os
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, OptionDB, RECORD_KINDS, SETTINGS_OPTION, utcnow

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

ENGINE: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

# Every option the add-on owns (removed on uninstall)
OPTION_NAMES = [kind.option for kind in RECORD_KINDS.values()] + [SETTINGS_OPTION]


def init_db(db_url: Optional[str] = None) -> Engine:
    """Bind the session factory to `db_url` (or DB_PATH) and create tables."""
    global ENGINE
    if db_url is None:
        DATA_DIR.mkdir(exist_ok=True)
        db_url = f"sqlite:///{os.getenv('DB_PATH', str(DATA_DIR / 'editor_plus.db'))}"
    ENGINE = create_engine(db_url, connect_args={"check_same_thread": False})
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    log.info("Option store ready (%s)", ENGINE.url)
    return ENGINE


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Options ──
def db_get_option(db: Session, name: str, default: Any = None) -> Any:
    row = db.get(OptionDB, name)
    if row is None:
        return default
    value = json.loads(row.value)
    return default if value is None else value


def db_update_option(db: Session, name: str, value: Any) -> None:
    row = db.get(OptionDB, name)
    if row is None:
        db.add(OptionDB(name=name, value=jd(value)))
    else:
        row.value = jd(value)
        row.updated_at = utcnow()
    db.commit()


def db_delete_option(db: Session, name: str) -> bool:
    row = db.get(OptionDB, name)
    if row is None:
        return False
    db.delete(row); db.commit()
    return True


def uninstall(db: Session) -> list:
    """Delete every stored option; returns the names that existed."""
    removed = [name for name in OPTION_NAMES if db_delete_option(db, name)]
    log.info("Uninstall — removed options: %s", ", ".join(removed) or "none")
    return removed
