from commit_relay.core.logging import get_logger
from commit_relay.routers.deps import get_ai_service
from commit_relay.schemas.webhook import WebhookEnvelope, ContentRequest, WebhookResponse
from commit_relay.services.ai_service import AIService
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = get_logger(__name__)
router = APIRouter()

def bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": message})

@router.post("/webhook")
async def handle_webhook(
    request: Request,
    ai_service: AIService = Depends(get_ai_service)
):
    try:
        try:
            body = await request.json()
        except ValueError:
            return bad_request("Request body must be JSON")

        if not isinstance(body, dict):
            return bad_request("Request body must be a JSON object")

        try:
            envelope = WebhookEnvelope.model_validate(body)
        except ValidationError as e:
            return bad_request(f"Invalid webhook payload: {e.errors()[0]['msg']}")

        if not envelope.event:
            return bad_request("Event type is required in the webhook payload")

        logger.info("webhook received", webhook_event=envelope.event)

        if envelope.event == "content_request":
            try:
                content_request = ContentRequest.model_validate(envelope.data or {})
            except ValidationError as e:
                return bad_request(f"Invalid content request: {e.errors()[0]['msg']}")

            result = await ai_service.generate_content(content_request)
            return WebhookResponse(
                success=True,
                message="Webhook processed successfully",
                data=result.model_dump()
            )

        return WebhookResponse(
            success=True,
            message=f"Received webhook event: {envelope.event}",
            data=None
        )

    except Exception as e:
        logger.error("error processing webhook", error=str(e))
        return JSONResponse(status_code=500, content={
            "success": False,
            "message": "Error processing webhook",
            "error": str(e)
        })
