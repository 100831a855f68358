from __future__ import annotations

import hashlib
import hmac

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import IDENTITY_TOKEN_HEX_LENGTH, IDENTITY_TOKEN_PREFIX


class CredentialService:
    """Password hashing and identity-token minting.

    Tokens are a keyed HMAC over name and email: deterministic for the same
    pair, not reversible, and unique as long as emails are unique.
    """

    def __init__(self, secret_key: str):
        if not secret_key:
            raise ValueError("secret_key is required to mint identity tokens")
        self._key = secret_key.encode("utf-8")

    def hash(self, secret: str) -> str:
        return generate_password_hash(secret)

    def verify(self, secret: str, opaque: str) -> bool:
        try:
            return check_password_hash(opaque, secret)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def mint_token(self, name: str, email: str) -> str:
        payload = f"{name.strip()}\n{email.strip().lower()}".encode("utf-8")
        digest = hmac.new(self._key, payload, hashlib.sha256).hexdigest()
        return f"{IDENTITY_TOKEN_PREFIX}-{digest[:IDENTITY_TOKEN_HEX_LENGTH]}"
