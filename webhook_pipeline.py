# webhook_pipeline.py

import json
import logging
import traceback
from typing import Optional
from urllib.parse import parse_qs

from classifier import classify_interest, describe_interest, extract_changed_files
from models.github_webhook import PushEvent
from models.webhook_result import (
    BadPayload,
    Fault,
    Ignored,
    Processed,
    Unauthorized,
    WebhookResult,
)
from utils import SignatureVerifier, branch_from_ref

logger = logging.getLogger(__name__)

PUSH_EVENT = "push"
MAX_LOGGED_FILES = 10


class PayloadError(ValueError):
    """The request body could not be read as a JSON object."""


def parse_payload(body_bytes: bytes, content_type: str = "") -> dict:
    """
    Decode the raw body into a JSON object.

    GitHub can deliver either application/json or a form-encoded body whose
    'payload' field holds the JSON document.
    """
    try:
        if "application/x-www-form-urlencoded" in content_type:
            form_data = parse_qs(body_bytes.decode("utf-8"))
            if "payload" not in form_data:
                raise PayloadError("No payload parameter in form data")
            payload = json.loads(form_data["payload"][0])
        else:
            payload = json.loads(body_bytes.decode("utf-8"))
    except (ValueError, RecursionError) as e:
        raise PayloadError(str(e)) from e

    if not isinstance(payload, dict):
        raise PayloadError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


def process_push_event(payload: dict, delivery: Optional[str] = None) -> Processed:
    """
    Validate a push payload and classify the files it touched.
    Raises pydantic.ValidationError when required fields are missing.
    """
    event = PushEvent.model_validate(payload)
    changed_files = sorted(extract_changed_files(event))
    flags = classify_interest(changed_files)
    result = Processed(
        repository=event.repository.full_name,
        branch=branch_from_ref(event.ref),
        pusher=event.pusher.name,
        commit_count=len(event.commits),
        changed_files=changed_files,
        interest_flags=flags,
    )

    logger.info(
        f"Push event processed (delivery {delivery}): repository={result.repository}, "
        f"branch={result.branch}, pusher={result.pusher}, commits={result.commit_count}, "
        f"changed_files={len(changed_files)} {changed_files[:MAX_LOGGED_FILES]}, "
        f"interest={flags.model_dump()}"
    )
    for action in describe_interest(flags):
        logger.info(action)
    return result


def process_webhook(
        body_bytes: bytes,
        event_type: Optional[str],
        signature: Optional[str],
        delivery: Optional[str],
        verifier: SignatureVerifier,
        content_type: str = "",
) -> WebhookResult:
    """
    Run one delivery through verify -> parse -> event filter -> classify.

    Never raises: every outcome, including unexpected failures, comes back as
    one of the WebhookResult models.
    """
    logger.info(
        f"Webhook received: event={event_type}, delivery={delivery}, "
        f"has_signature={bool(signature)}, body_size={len(body_bytes)}"
    )
    try:
        # 1. Verify signature against the untouched body.
        if not verifier.verify(body_bytes, signature):
            logger.error(
                f"Webhook signature verification failed (delivery {delivery}, "
                f"signature present: {bool(signature)})."
            )
            return Unauthorized()

        # 2. Parse payload.
        try:
            payload = parse_payload(body_bytes, content_type)
        except PayloadError as e:
            logger.error(f"Failed to parse webhook payload (delivery {delivery}): {e}")
            return BadPayload(reason=str(e))

        # 3. Only push events are classified.
        if event_type != PUSH_EVENT:
            ignored = event_type or "unknown"
            logger.info(f"Ignoring {ignored} event (delivery {delivery}).")
            return Ignored(event_type=ignored)

        # 4. Classify.
        return process_push_event(payload, delivery)
    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error(f"Webhook processing error (delivery {delivery}): {str(e)}\n{error_trace}")
        return Fault()
