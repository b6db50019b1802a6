"""
Invitation tokens

The plaintext token travels only through the invitation side channel;
the store keeps its SHA-256 hex digest.
"""

import hashlib
import secrets
from typing import Tuple

# 32 random bytes = 256 bits of entropy
TOKEN_BYTES = 32


def hash_invitation_token(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def new_invitation_token() -> Tuple[str, str]:
    """Return (plaintext, token_hash). URL-safe, unpadded base64."""
    plaintext = secrets.token_urlsafe(TOKEN_BYTES)
    return plaintext, hash_invitation_token(plaintext)
