"""
Admin API tests — auth + nonce, CRUD per kind, duplicate, settings,
render, editor payload, preview, uninstall.
"""
import pytest

from editor_plus.api.auth import (
    ADMIN_NONCE, BLOCK_RULE_NONCE, PATTERNS_NONCE, SETTINGS_NONCE, SNIPPET_NONCE,
    VARIATION_NONCE, create_nonce,
)
from conftest import ADMIN_TOKEN


def nonce(action):
    return create_nonce(action, ADMIN_TOKEN)


def save_pattern(client, **fields):
    data = {"title": "Hero", "content": "<!-- wp:paragraph --><p>Hi</p><!-- /wp:paragraph -->",
            "enabled": "1", "nonce": nonce(PATTERNS_NONCE)}
    data.update(fields)
    return client.post("/api/patterns", json=data)


# ── Auth ──────────────────────────────────────────────────────────────────

class TestAuth:
    def test_health_is_open(self, client):
        r = client.get("/health", headers={"X-Admin-Token": ""})
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_missing_token(self, client):
        r = client.get("/api/patterns", headers={"X-Admin-Token": ""})
        assert r.status_code == 403
        body = r.json()
        assert body["success"] is False
        assert body["message"] == "Permission denied."
        assert body["error"] == "permission"

    def test_wrong_token(self, client):
        r = client.get("/api/patterns", headers={"X-Admin-Token": "nope"})
        assert r.status_code == 403

    def test_token_from_query(self, client):
        r = client.get(f"/api/patterns?token={ADMIN_TOKEN}", headers={"X-Admin-Token": ""})
        assert r.status_code == 200

    def test_missing_nonce(self, client):
        r = client.post("/api/patterns", json={"title": "Hero", "content": "<p>x</p>"})
        assert r.status_code == 403
        assert r.json()["message"] == "Invalid security token."

    def test_nonce_is_per_action(self, client):
        r = save_pattern(client, nonce=nonce(SNIPPET_NONCE))
        assert r.status_code == 403

    def test_nonce_header(self, client):
        r = client.post("/api/patterns", json={"title": "Hero", "content": "<p>x</p>"},
                        headers={"X-ABE-Nonce": nonce(PATTERNS_NONCE)})
        assert r.status_code == 200

    def test_nonce_endpoint(self, client):
        r = client.get("/api/nonce", params={"action": PATTERNS_NONCE})
        assert r.json()["result"]["nonce"] == nonce(PATTERNS_NONCE)

    def test_nonce_unknown_action(self, client):
        assert client.get("/api/nonce", params={"action": "whatever"}).status_code == 400

    def test_permission_checked_before_lookup(self, client):
        r = client.post("/api/patterns/missing/toggle", headers={"X-Admin-Token": "nope"})
        assert r.status_code == 403


# ── Patterns ──────────────────────────────────────────────────────────────

class TestPatterns:
    def test_save_returns_record_and_shortcode(self, client):
        body = save_pattern(client).json()
        assert body["success"] is True
        assert body["message"] == "Pattern saved successfully."
        assert body["result"]["record"]["slug"] == "hero"
        assert body["result"]["shortcode"] == '[abe_pattern slug="hero"]'

    def test_second_hero_gets_suffix(self, client):
        save_pattern(client)
        assert save_pattern(client).json()["result"]["record"]["slug"] == "hero-1"

    def test_validation_error(self, client):
        r = save_pattern(client, title="")
        assert r.status_code == 400
        assert r.json()["message"] == "Title and content are required."
        assert client.get("/api/patterns").json()["result"] == {}

    def test_list(self, client):
        pid = save_pattern(client).json()["result"]["id"]
        result = client.get("/api/patterns").json()["result"]
        assert list(result) == [pid]
        assert result[pid]["title"] == "Hero"

    def test_duplicate(self, client):
        pid = save_pattern(client).json()["result"]["id"]
        url = f"/api/patterns/{pid}/duplicate"
        first = client.post(url, json={"nonce": nonce(PATTERNS_NONCE)}).json()["result"]["record"]
        second = client.post(url, json={"nonce": nonce(PATTERNS_NONCE)}).json()["result"]["record"]
        assert (first["slug"], second["slug"]) == ("hero-copy", "hero-copy-1")
        assert first["title"] == "Hero (Copy)"
        assert first["enabled"] is False

    def test_duplicate_missing(self, client):
        r = client.post("/api/patterns/nope/duplicate", json={"nonce": nonce(PATTERNS_NONCE)})
        assert r.status_code == 404
        assert r.json()["message"] == "Pattern not found."

    def test_preview(self, client):
        save_pattern(client, enabled="0")
        r = client.get("/preview/pattern/hero")
        assert r.status_code == 200
        assert r.text.startswith("<!DOCTYPE html>")
        assert "<p>Hi</p>" in r.text

    def test_preview_missing(self, client):
        assert client.get("/preview/pattern/ghost").status_code == 404


# ── Other kinds ───────────────────────────────────────────────────────────

KINDS = [
    ("block-rules", BLOCK_RULE_NONCE, {"block_type": "core/image", "css": "img{}"}),
    ("snippets",    SNIPPET_NONCE,    {"name": "Global", "type": "css", "code": "body{}"}),
    ("variations",  VARIATION_NONCE,  {"name": "wide", "block_type": "core/group"}),
]


@pytest.mark.parametrize("segment,action,payload", KINDS)
class TestCrud:
    def test_save_toggle_delete(self, client, segment, action, payload):
        r = client.post(f"/api/{segment}", json={**payload, "nonce": nonce(action)})
        assert r.status_code == 200
        rid = r.json()["result"]["id"]

        r = client.post(f"/api/{segment}/{rid}/toggle", json={"nonce": nonce(action)})
        assert r.json()["result"] == {"id": rid, "enabled": True}

        r = client.delete(f"/api/{segment}/{rid}", headers={"X-ABE-Nonce": nonce(action)})
        assert r.status_code == 200
        assert client.get(f"/api/{segment}").json()["result"] == {}

    def test_toggle_missing(self, client, segment, action, payload):
        client.post(f"/api/{segment}", json={**payload, "nonce": nonce(action)})
        before = client.get(f"/api/{segment}").json()["result"]
        r = client.post(f"/api/{segment}/missing/toggle", json={"nonce": nonce(action)})
        assert r.status_code == 404
        assert r.json()["error"] == "not_found"
        assert client.get(f"/api/{segment}").json()["result"] == before

    def test_delete_missing(self, client, segment, action, payload):
        r = client.delete(f"/api/{segment}/missing", headers={"X-ABE-Nonce": nonce(action)})
        assert r.status_code == 404


def test_block_rule_validation(client):
    r = client.post("/api/block-rules", json={"name": "x", "nonce": nonce(BLOCK_RULE_NONCE)})
    assert r.status_code == 400
    assert r.json()["message"] == "Block type is required."


def test_snippet_wire_type(client):
    r = client.post("/api/snippets", json={"type": "js", "code": "run()", "nonce": nonce(SNIPPET_NONCE)})
    assert r.json()["result"]["record"]["type"] == "js"


# ── Settings / catalogs / editor ──────────────────────────────────────────

class TestSettings:
    def test_round_trip(self, client):
        r = client.post("/api/settings", json={"editor_width": "900", "focus_mode": "1",
                                               "nonce": nonce(SETTINGS_NONCE)})
        assert r.json()["message"] == "Settings saved."
        got = client.get("/api/settings").json()["result"]
        assert got["editor_width"] == "900"
        assert got["focus_mode"] is True

    def test_requires_nonce(self, client):
        assert client.post("/api/settings", json={"focus_mode": "1"}).status_code == 403


class TestCatalogs:
    def test_block_classes(self, client):
        result = client.get("/api/catalog/block-classes").json()["result"]
        assert "wp-block-paragraph" in result

    def test_unknown(self, client):
        assert client.get("/api/catalog/nope").status_code == 404


class TestEditorAssets:
    def test_payload(self, client):
        save_pattern(client)
        client.post("/api/block-rules", json={"block_type": "core/image", "css": "ed{}", "scope": ["editor"],
                                              "enabled": "1", "nonce": nonce(BLOCK_RULE_NONCE)})
        client.post("/api/settings", json={"custom_css_file": "https://cdn.example.com/e.css",
                                           "nonce": nonce(SETTINGS_NONCE)})
        client.post("/api/variations", json={"name": "wide", "block_type": "core/group", "enabled": "1",
                                             "attributes": {"align": "wide"}, "nonce": nonce(VARIATION_NONCE)})
        client.post("/api/variations", json={"name": "off", "block_type": "core/group",
                                             "nonce": nonce(VARIATION_NONCE)})
        result = client.get("/api/editor/assets").json()["result"]
        assert [v["name"] for v in result["variations"]] == ["wide"]
        assert result["variations"][0]["blockType"] == "core/group"
        assert result["variations"][0]["attributes"] == {"align": "wide"}
        assert result["handle"] == "abe-editor"
        assert result["patterns"][0]["name"] == "abe/hero"
        assert any("ed{}" in a["code"] for a in result["inline"])
        assert result["files"]["styles"][0]["src"] == "https://cdn.example.com/e.css"
        assert result["nonces"][PATTERNS_NONCE] == nonce(PATTERNS_NONCE)
        assert result["patternCategories"][0]["name"] == "abe-custom"


# ── Render / uninstall ────────────────────────────────────────────────────

class TestRender:
    def test_render(self, client):
        client.post("/api/block-rules", json={"block_type": "core/paragraph", "css": "p{}", "enabled": "1",
                                              "nonce": nonce(BLOCK_RULE_NONCE)})
        r = client.post("/api/render", json={"content": "<!-- wp:paragraph --><p>x</p><!-- /wp:paragraph -->"})
        result = r.json()["result"]
        assert result["body"] == "<p>x</p>"
        assert '<style id="abe-per-block-css">' in result["head"]
        assert result["blocks"] == ["core/paragraph"]

    def test_render_requires_content(self, client):
        assert client.post("/api/render", json={}).status_code == 400


class TestUninstall:
    def test_uninstall(self, client):
        save_pattern(client)
        r = client.post("/api/admin/uninstall", json={"nonce": nonce(ADMIN_NONCE)})
        assert r.json()["result"]["removed"] == ["abe_patterns"]
        assert client.get("/api/patterns").json()["result"] == {}

    def test_requires_admin_nonce(self, client):
        r = client.post("/api/admin/uninstall", json={"nonce": nonce(PATTERNS_NONCE)})
        assert r.status_code == 403
