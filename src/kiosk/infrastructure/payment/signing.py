"""HMAC-SHA256 webhook signatures.

A signature is the hex digest of the raw request body, optionally sent
as ``sha256=<hex>``.
"""

from __future__ import annotations

import hmac
from hashlib import sha256

PREFIX = "sha256="


def sign_payload(secret: str, payload: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), payload, sha256).hexdigest()


def verify_signature(secret: str | None, payload: bytes, signature: str) -> bool:
    if not secret or not signature:
        return False
    candidate = signature.strip()
    if candidate.startswith(PREFIX):
        candidate = candidate[len(PREFIX):]
    return hmac.compare_digest(sign_payload(secret, payload), candidate.lower())
