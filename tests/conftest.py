"""Shared fixtures: signing helpers, a verifier and an httpx client bound to the app."""

import json
import logging
import os
from collections.abc import AsyncGenerator

# Keep the app from reading a local config.yaml or writing logs.db during tests.
os.environ["CONFIG_PATH"] = os.path.join(os.path.dirname(__file__), "no-such-config.yaml")
os.environ["LOG_DB_PATH"] = ""
os.environ["WEBHOOK_SECRET"] = ""

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dependencies import get_signature_verifier  # noqa: E402
from main import app  # noqa: E402
from utils import SignatureVerifier, sign_payload  # noqa: E402

WEBHOOK_SECRET = "test-secret"


def make_push_payload(
    *,
    commits: list[dict] | None = None,
    ref: str = "refs/heads/main",
    repository: str = "testuser/test-repo",
    pusher: str = "testuser",
) -> dict:
    """Build a GitHub push payload with the fields the receiver reads plus some it ignores."""
    if commits is None:
        commits = [{"added": ["index.html"], "modified": ["src/app.js"], "removed": []}]
    return {
        "ref": ref,
        "before": "0000000000000000000000000000000000000000",
        "after": "1234567890abcdef1234567890abcdef12345678",
        "repository": {"id": 123456789, "name": repository.split("/")[-1], "full_name": repository},
        "pusher": {"name": pusher, "email": "test@example.com"},
        "sender": {"login": pusher, "type": "User"},
        "commits": commits,
    }


def encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


def signed_headers(body: bytes, event: str = "push", secret: str = WEBHOOK_SECRET) -> dict:
    return {
        "Content-Type": "application/json",
        "X-GitHub-Event": event,
        "X-GitHub-Delivery": "72d3162e-cc78-11e3-81ab-4c9367dc0958",
        "X-Hub-Signature-256": sign_payload(body, secret),
    }


@pytest.fixture
def secret() -> str:
    """Shared secret the app verifies against. Parametrize with "" to disable verification."""
    return WEBHOOK_SECRET


@pytest.fixture
def verifier(secret: str) -> SignatureVerifier:
    return SignatureVerifier(secret)


@pytest.fixture
async def client(verifier: SignatureVerifier) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient against the app with the verifier overridden."""
    app.dependency_overrides[get_signature_verifier] = lambda: verifier
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
