# utils.py

import hmac
import hashlib
import logging
import string
from typing import Optional, Union

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="
DIGEST_HEX_LENGTH = hashlib.sha256().digest_size * 2
BRANCH_PREFIX = "refs/heads/"


def _secret_bytes(secret: Union[str, bytes, None]) -> bytes:
    if not secret:
        return b""
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def sign_payload(request_body: bytes, secret: Union[str, bytes]) -> str:
    """Return the X-Hub-Signature-256 value GitHub sends for this body."""
    mac = hmac.new(_secret_bytes(secret), msg=request_body, digestmod=hashlib.sha256)
    return SIGNATURE_PREFIX + mac.hexdigest()


class SignatureVerifier:
    """
    Checks X-Hub-Signature-256 tokens against the shared webhook secret.

    The secret is fixed at construction; an empty or missing secret turns
    verification off and every call logs a warning instead.
    """

    def __init__(self, secret: Union[str, bytes, None]):
        self._secret = _secret_bytes(secret)

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    def verify(self, request_body: bytes, signature: Optional[str]) -> bool:
        if not self._secret:
            logger.warning("Webhook secret is not configured. Skipping signature verification.")
            return True

        if not signature:
            return False

        provided_hex = signature[len(SIGNATURE_PREFIX):] if signature.startswith(SIGNATURE_PREFIX) else signature
        # bytes.fromhex skips whitespace, so check the characters first
        if len(provided_hex) != DIGEST_HEX_LENGTH or not all(c in string.hexdigits for c in provided_hex):
            return False
        provided = bytes.fromhex(provided_hex)

        expected = hmac.new(self._secret, msg=request_body, digestmod=hashlib.sha256).digest()
        if len(provided) != len(expected):
            return False
        return hmac.compare_digest(expected, provided)


def branch_from_ref(ref: str) -> str:
    """Strip a leading refs/heads/ from a git ref."""
    if ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX):]
    return ref
