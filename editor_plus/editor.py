"""
Editor-context payload: everything the block editor needs at load time
(settings, custom files, inline code on the `abe-editor` handle, pattern
and variation registrations).
"""
from typing import Dict, List, Optional

from .catalog import PATTERN_CATEGORIES, PATTERN_CATEGORY, PATTERN_CATEGORY_LABEL
from .injection import EDITOR_HANDLE, InlineAsset, Injector, wrap_iife
from .models import VariationRecord
from .patterns import editor_registrations
from .settings import SettingsFacade


def variation_registrations(variations: Dict[str, VariationRecord]) -> List[dict]:
    return [
        {
            "blockType":   v.block_type,
            "name":        v.name,
            "title":       v.title or v.name,
            "description": v.description,
            "icon":        v.icon,
            "category":    v.category,
            "scope":       v.scope,
            "attributes":  v.attributes,
            "innerBlocks": v.inner_blocks,
            "keywords":    v.keywords,
        }
        for v in variations.values() if v.enabled
    ]


def pattern_categories() -> List[dict]:
    return [{"name": PATTERN_CATEGORY, "label": PATTERN_CATEGORY_LABEL}] + [
        {"name": name, "label": label} for name, label in PATTERN_CATEGORIES.items()
    ]


def _files(facade: SettingsFacade) -> dict:
    styles, scripts = [], []
    if facade.get("custom_css_file"):
        styles.append({"handle": "abe-custom-css-file", "src": facade.get("custom_css_file"), "deps": [EDITOR_HANDLE]})
    if facade.get("custom_js_file"):
        scripts.append({"handle": "abe-custom-js-file", "src": facade.get("custom_js_file"), "deps": [EDITOR_HANDLE]})
    return {"styles": styles, "scripts": scripts}


def _settings_inline(facade: SettingsFacade) -> List[InlineAsset]:
    out = []
    if facade.get("custom_css_inline"):
        out.append(InlineAsset(EDITOR_HANDLE, "style", facade.get("custom_css_inline")))
    if facade.get("custom_js_inline"):
        out.append(InlineAsset(EDITOR_HANDLE, "script", wrap_iife(facade.get("custom_js_inline"))))
    return out


def editor_assets(store, facade: SettingsFacade, nonces: Optional[Dict[str, str]] = None) -> dict:
    injector = Injector.from_store(store)
    inline = _settings_inline(facade) + injector.editor_inline()
    return {
        "handle":            EDITOR_HANDLE,
        "settings":          facade.editor_config(),
        "files":             _files(facade),
        "inline":            [a._asdict() for a in inline],
        "patterns":          editor_registrations(store.list("pattern")),
        "patternCategories": pattern_categories(),
        "variations":        variation_registrations(store.list("variation")),
        "nonces":            nonces or {},
    }
