"""Settings facade — read-only view of the global settings at render time."""
import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from .cleanup import class_removal_list
from .database import db_get_option, db_update_option
from .models import SETTINGS_OPTION, GlobalSettings
from .sanitize import sanitize_settings

log = logging.getLogger(__name__)


def _upgrade(db: Session, raw: dict) -> GlobalSettings:
    settings = sanitize_settings(raw)
    db_update_option(db, SETTINGS_OPTION, settings.model_dump(mode="json"))
    log.info("Settings upgraded to version %d", settings.version)
    return settings


def load_settings(db: Session) -> GlobalSettings:
    """Stored settings merged over defaults. Older or invalid records are re-sanitized and written back."""
    raw = db_get_option(db, SETTINGS_OPTION, {})
    if not isinstance(raw, dict) or not raw:
        return GlobalSettings()
    try:
        settings = GlobalSettings.model_validate(raw)
    except PydanticValidationError:
        log.warning("Stored settings did not validate, re-sanitizing")
        return _upgrade(db, raw)
    if settings.version != GlobalSettings().version:
        return _upgrade(db, raw)
    return settings


def update_settings(db: Session, raw: Optional[dict]) -> GlobalSettings:
    settings = sanitize_settings(raw, current=load_settings(db))
    db_update_option(db, SETTINGS_OPTION, settings.model_dump(mode="json"))
    log.info("Settings updated")
    return settings


class SettingsFacade:
    def __init__(self, settings: GlobalSettings):
        self.settings = settings

    @classmethod
    def load(cls, db: Session) -> "SettingsFacade":
        return cls(load_settings(db))

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self.settings, key, default)

    def classes_to_remove(self) -> list:
        return class_removal_list(self.settings)

    def editor_config(self) -> dict:
        """Settings the editor script reads (camelCase keys)."""
        s = self.settings
        return {
            "editorWidth":       s.editor_width,
            "editorWidthUnit":   s.editor_width_unit,
            "wordCountEnabled":  s.word_count_enabled,
            "wordCountPosition": s.word_count_position,
            "disableFullscreen": s.disable_fullscreen,
            "focusMode":         s.focus_mode,
            "typewriterMode":    s.typewriter_mode,
        }
