# dependencies.py

import logging
from functools import lru_cache

from config import WEBHOOK_SECRET
from utils import SignatureVerifier

logger = logging.getLogger(__name__)


@lru_cache()
def get_signature_verifier() -> SignatureVerifier:
    verifier = SignatureVerifier(WEBHOOK_SECRET)
    if not verifier.enabled:
        logger.warning("WEBHOOK_SECRET is not configured. Incoming webhooks will not be authenticated.")
    return verifier
