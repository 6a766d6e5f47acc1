"""
Data models — option store row + the four record kinds + global settings.
SQLAlchemy (SQLite) for persistence, Pydantic v2 for the typed records.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, NamedTuple, Optional, Type, Union

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class OptionDB(Base):
    """Key-value option store: one JSON document per option name."""
    __tablename__ = "options"
    name:       Mapped[str]      = mapped_column(sa.String, primary_key=True)
    value:      Mapped[str]      = mapped_column(sa.Text, default="null")
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=utcnow, onupdate=utcnow)


# ── RECORDS ────────────────────────────────────────────────────────────

Scope          = Literal["editor", "frontend"]
VariationScope = Literal["inserter", "block", "transform"]


class PatternRecord(BaseModel):
    kind:           Literal["pattern"] = "pattern"
    id:             str
    slug:           str
    title:          str
    description:    str       = ""
    content:        str
    categories:     List[str] = Field(default_factory=list)
    keywords:       List[str] = Field(default_factory=list)
    block_types:    List[str] = Field(default_factory=list)
    viewport_width: int       = 1200
    enabled:        bool      = False
    created_at:     Optional[str] = None
    modified_at:    Optional[str] = None


class BlockRuleRecord(BaseModel):
    kind:       Literal["block_rule"] = "block_rule"
    id:         str
    name:       str
    block_type: str
    css:        str         = ""
    js:         str         = ""
    scope:      List[Scope] = Field(default_factory=lambda: ["frontend"])
    enabled:    bool        = False
    priority:   int         = 10


class SnippetRecord(BaseModel):
    """Global CSS/JS. `type` on the wire, `code_type` in Python."""
    model_config = ConfigDict(populate_by_name=True)

    kind:      Literal["snippet"] = "snippet"
    id:        str
    name:      str
    code_type: Literal["css", "js"] = Field(default="css", alias="type")
    code:      str         = ""
    scope:     List[Scope] = Field(default_factory=lambda: ["editor"])
    enabled:   bool        = False
    priority:  int         = 10


class VariationRecord(BaseModel):
    kind:         Literal["variation"] = "variation"
    id:           str
    name:         str
    title:        str                  = ""
    description:  str                  = ""
    block_type:   str
    icon:         str                  = "block-default"
    category:     str                  = "common"
    scope:        List[VariationScope] = Field(default_factory=lambda: ["inserter"])
    attributes:   Dict[str, Any]       = Field(default_factory=dict)
    inner_blocks: List[Any]            = Field(default_factory=list)
    keywords:     List[str]            = Field(default_factory=list)
    enabled:      bool                 = False


Record = Union[PatternRecord, BlockRuleRecord, SnippetRecord, VariationRecord]


class RecordKind(NamedTuple):
    option:  str
    prefix:  str
    model:   Type[BaseModel]
    label:   str


RECORD_KINDS: Dict[str, RecordKind] = {
    "pattern":    RecordKind("abe_patterns",         "pattern",    PatternRecord,   "Pattern"),
    "block_rule": RecordKind("abe_per_block_rules",  "block_rule", BlockRuleRecord, "Block rule"),
    "snippet":    RecordKind("abe_code_snippets",    "snippet",    SnippetRecord,   "Snippet"),
    "variation":  RecordKind("abe_block_variations", "variation",  VariationRecord, "Variation"),
}


def new_record_id(kind: str) -> str:
    return f"{RECORD_KINDS[kind].prefix}_{uuid.uuid4()}"


def dump_record(record: BaseModel) -> dict:
    """Wire/storage form of a record (aliases applied, JSON-safe)."""
    return record.model_dump(mode="json", by_alias=True)


# ── SETTINGS ───────────────────────────────────────────────────────────

SETTINGS_OPTION  = "abe_settings"
SETTINGS_VERSION = 3


class GlobalSettings(BaseModel):
    """Single versioned settings record (editor + frontend cleanup)."""
    version: int = SETTINGS_VERSION

    # Editor
    editor_width:        str                             = ""
    editor_width_unit:   Literal["px", "%", "vw"]        = "px"
    word_count_enabled:  bool                            = True
    word_count_position: Literal["top", "bottom"]        = "top"
    focus_mode:          bool                            = False
    typewriter_mode:     bool                            = False
    disable_fullscreen:  bool                            = False
    custom_css_inline:   str                             = ""
    custom_css_file:     str                             = ""
    custom_js_inline:    str                             = ""
    custom_js_file:      str                             = ""

    # Frontend cleanup
    remove_block_classes:     List[str] = Field(default_factory=list)
    custom_classes_to_remove: str       = ""
    remove_wp_block_library:  bool      = False
    remove_global_styles:     bool      = False
    remove_duotone_svg:       bool      = False
    lazy_load_images:         bool      = True
    defer_block_styles:       bool      = False
    clean_head:               bool      = False
    remove_emoji_scripts:     bool      = False
    remove_wp_embed:          bool      = False
