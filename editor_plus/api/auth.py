"""
Operator check + per-action anti-forgery nonces.

Operator token: X-Admin-Token header, ?token= or the admin_token cookie.
Nonce: HMAC-SHA256(NONCE_SECRET, "<action>|<token>"), sent as the
X-ABE-Nonce header, ?nonce= or a "nonce" key in the JSON body.
"""
import hashlib
import hmac
import logging
import os

from fastapi import Depends, Request

from ..errors import AccessDenied
from .responses import to_http

log = logging.getLogger(__name__)

NONCE_LENGTH = 10

# One action per admin surface
PATTERNS_NONCE   = "abe_patterns_nonce"
BLOCK_RULE_NONCE = "abe_per_block_nonce"
SNIPPET_NONCE    = "abe_custom_code_nonce"
VARIATION_NONCE  = "abe_variations_nonce"
SETTINGS_NONCE   = "abe_settings_nonce"
ADMIN_NONCE      = "abe_admin_nonce"

NONCE_ACTIONS = [PATTERNS_NONCE, BLOCK_RULE_NONCE, SNIPPET_NONCE, VARIATION_NONCE, SETTINGS_NONCE, ADMIN_NONCE]


def _admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "changeme")


def _secret() -> bytes:
    return (os.getenv("NONCE_SECRET") or _admin_token()).encode()


def _request_token(request: Request) -> str:
    return (request.headers.get("X-Admin-Token")
            or request.query_params.get("token")
            or request.cookies.get("admin_token", ""))


def require_operator(request: Request) -> str:
    token = _request_token(request)
    if not token or not hmac.compare_digest(token.encode(), _admin_token().encode()):
        log.warning("Operator check failed on %s", request.url.path)
        raise to_http(AccessDenied("Permission denied."))
    return token


def create_nonce(action: str, token: str) -> str:
    digest = hmac.new(_secret(), f"{action}|{token}".encode(), hashlib.sha256).hexdigest()
    return digest[:NONCE_LENGTH]


def verify_nonce(nonce: str, action: str, token: str) -> bool:
    if not nonce:
        return False
    return hmac.compare_digest(nonce.encode(), create_nonce(action, token).encode())


async def _request_nonce(request: Request) -> str:
    nonce = request.headers.get("X-ABE-Nonce") or request.query_params.get("nonce")
    if nonce:
        return nonce
    if request.method in ("POST", "PUT", "PATCH") and await request.body():
        try:
            data = await request.json()
        except ValueError:
            return ""
        if isinstance(data, dict):
            return str(data.get("nonce") or "")
    return ""


def require_nonce(action: str):
    """Dependency: operator token + a valid nonce for `action`."""

    async def _check(request: Request, token: str = Depends(require_operator)) -> str:
        if not verify_nonce(await _request_nonce(request), action, token):
            log.warning("Invalid nonce for %s on %s", action, request.url.path)
            raise to_http(AccessDenied("Invalid security token."))
        return token

    return _check
