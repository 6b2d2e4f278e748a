import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from dependencies import get_signature_verifier
from models.webhook_result import (
    BadPayload,
    Ignored,
    Processed,
    Unauthorized,
    WebhookResult,
)
from utils import SignatureVerifier
from webhook_pipeline import process_webhook

router = APIRouter()
logger = logging.getLogger(__name__)


def build_response(result: WebhookResult, delivery: Optional[str]) -> JSONResponse:
    """
    Map a pipeline result to its HTTP status and response body.
    """
    if isinstance(result, Processed):
        content = {
            "message": "Webhook processed successfully",
            "delivery": delivery,
            "processed": True,
            **result.model_dump(exclude={"kind"}),
        }
        return JSONResponse(status_code=status.HTTP_200_OK, content=content)

    if isinstance(result, Ignored):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": f"{result.event_type} event ignored",
                "delivery": delivery,
                "processed": False,
            },
        )

    if isinstance(result, Unauthorized):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Unauthorized", "message": "Invalid signature"},
        )

    if isinstance(result, BadPayload):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Bad Request", "message": "Invalid JSON payload"},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "message": "Failed to process webhook"},
    )


@router.post("/webhook", summary="GitHub Webhook Endpoint")
async def handle_webhook(
        request: Request,
        x_hub_signature_256: Optional[str] = Header(None),
        x_github_event: Optional[str] = Header(None),
        x_github_delivery: Optional[str] = Header(None),
        verifier: SignatureVerifier = Depends(get_signature_verifier),
):
    body_bytes = await request.body()
    result = process_webhook(
        body_bytes,
        event_type=x_github_event,
        signature=x_hub_signature_256,
        delivery=x_github_delivery,
        verifier=verifier,
        content_type=request.headers.get("Content-Type", ""),
    )
    return build_response(result, x_github_delivery)
