# webhook_tester.py
#
# Sends signed sample deliveries to a running receiver.
# Usage: TEST_SERVER_URL=http://localhost:3000 WEBHOOK_SECRET=... python webhook_tester.py

import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

import requests

from utils import sign_payload

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10
ZERO_SHA = "0000000000000000000000000000000000000000"
SAMPLE_SHA = "1234567890abcdef1234567890abcdef12345678"


class WebhookTester:
    def __init__(self, server_url: str = "http://localhost:3000", secret: Optional[str] = None):
        self.server_url = server_url.rstrip("/")
        self.secret = secret

    def generate_signature(self, body: bytes) -> Optional[str]:
        if not self.secret:
            return None
        return sign_payload(body, self.secret)

    def send_webhook(
            self,
            event_type: str,
            payload: Union[dict, str, bytes],
            headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        POST a delivery to /webhook. Dicts are serialized as JSON; str and bytes are sent verbatim.
        """
        if isinstance(payload, dict):
            body = json.dumps(payload).encode("utf-8")
        elif isinstance(payload, str):
            body = payload.encode("utf-8")
        else:
            body = payload

        request_headers = {
            "Content-Type": "application/json",
            "X-GitHub-Event": event_type,
            "X-GitHub-Delivery": str(uuid.uuid4()),
            "User-Agent": "GitHub-Hookshot/webhook-tester",
        }
        signature = self.generate_signature(body)
        if signature:
            request_headers["X-Hub-Signature-256"] = signature
        request_headers.update(headers or {})

        return requests.post(
            f"{self.server_url}/webhook",
            data=body,
            headers=request_headers,
            timeout=REQUEST_TIMEOUT,
        )

    def check_health(self) -> bool:
        try:
            response = requests.get(f"{self.server_url}/health", timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Health check request failed: {e}")
            return False
        return response.status_code == 200

    @staticmethod
    def create_push_payload(
            repository: str = "testuser/test-repo",
            branch: str = "main",
            pusher: str = "testuser",
            files: Optional[List[str]] = None,
    ) -> dict:
        """
        Build a push payload with one commit. Files are spread over
        added/removed/modified by their index modulo 3.
        """
        if files is None:
            files = ["index.html", "src/app.js"]
        owner, _, name = repository.partition("/")
        timestamp = datetime.now(timezone.utc).isoformat()
        person = {"name": pusher, "email": "test@example.com", "username": pusher}
        commit = {
            "id": SAMPLE_SHA,
            "distinct": True,
            "message": "Test commit message",
            "timestamp": timestamp,
            "url": f"https://github.com/{repository}/commit/{SAMPLE_SHA}",
            "author": person,
            "committer": person,
            "added": [f for i, f in enumerate(files) if i % 3 == 0],
            "removed": [f for i, f in enumerate(files) if i % 3 == 1],
            "modified": [f for i, f in enumerate(files) if i % 3 == 2],
        }
        return {
            "ref": f"refs/heads/{branch}",
            "before": ZERO_SHA,
            "after": SAMPLE_SHA,
            "repository": {
                "name": name,
                "full_name": repository,
                "private": False,
                "owner": {"name": owner, "login": owner},
                "html_url": f"https://github.com/{repository}",
                "default_branch": branch,
            },
            "pusher": {"name": pusher, "email": "test@example.com"},
            "sender": {"login": pusher, "type": "User"},
            "commits": [commit],
            "head_commit": commit,
        }


def run_smoke_tests(server_url: str, secret: Optional[str] = None) -> Dict[str, bool]:
    """
    Exercise a running receiver end to end. Returns {check name: passed}.
    """
    tester = WebhookTester(server_url, secret)
    results = {"health": tester.check_health()}

    def check(name, send, accept):
        try:
            response = send()
            results[name] = accept(response)
            logger.info(f"{name}: status {response.status_code}")
        except requests.RequestException as e:
            logger.error(f"{name}: request failed: {e}")
            results[name] = False

    check(
        "push",
        lambda: tester.send_webhook(
            "push", tester.create_push_payload(files=["index.html", "package.json", "src/app.js"])
        ),
        lambda r: r.status_code == 200 and r.json().get("processed") is True,
    )

    if secret:
        wrong = WebhookTester(server_url, "wrong_secret")
        check(
            "invalid_signature",
            lambda: wrong.send_webhook("push", tester.create_push_payload()),
            lambda r: r.status_code == 401,
        )

    check(
        "non_push_event",
        lambda: tester.send_webhook(
            "issues", {"action": "opened", "issue": {"id": 1, "title": "Test issue"}}
        ),
        lambda r: r.status_code == 200 and r.json().get("processed") is False,
    )

    check(
        "invalid_json",
        lambda: tester.send_webhook("push", "invalid json"),
        lambda r: r.status_code == 400,
    )

    for name, passed in results.items():
        logger.info(f"{'PASS' if passed else 'FAIL'} {name}")
    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    outcome = run_smoke_tests(
        os.getenv("TEST_SERVER_URL", "http://localhost:3000"),
        os.getenv("WEBHOOK_SECRET") or None,
    )
    raise SystemExit(0 if all(outcome.values()) else 1)
