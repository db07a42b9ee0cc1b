from commit_relay.core.config import Settings
from commit_relay.core.logging import get_logger
from commit_relay.models.commit import PushEvent
from commit_relay.routers.deps import get_settings_state, get_log_store, get_doc_sync
from commit_relay.services.docs_sync import DocSyncClient
from commit_relay.services.formatter import format_plaintext, format_push_header
from commit_relay.services.log_store import CommitLogStore
from commit_relay.services.signature import verify
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import asyncio
import json

logger = get_logger(__name__)
router = APIRouter()

def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

@router.post("/github")
async def handle_github_webhook(
    request: Request,
    settings: Settings = Depends(get_settings_state),
    store: CommitLogStore = Depends(get_log_store),
    doc_sync: DocSyncClient = Depends(get_doc_sync)
):
    try:
        github_event = request.headers.get("x-github-event")
        signature = request.headers.get("x-hub-signature-256")

        if not github_event:
            return JSONResponse(status_code=400, content={
                "success": False,
                "message": "Missing X-GitHub-Event header"
            })

        #signed over the raw bytes, never a re-serialized body
        raw_body = await request.body()
        if settings.signature_required and not verify(raw_body, signature, settings.GITHUB_WEBHOOK_SECRET):
            logger.warning("invalid github webhook signature", github_event=github_event)
            return JSONResponse(status_code=401, content={
                "success": False,
                "message": "Invalid webhook signature"
            })

        logger.info("received github webhook event", github_event=github_event)

        if github_event == "push":
            payload = json.loads(raw_body or b"{}")
            await handle_push_event(PushEvent.model_validate(payload), store, doc_sync)
        else:
            logger.info("unhandled github event type", github_event=github_event)

        return JSONResponse(status_code=200, content={
            "success": True,
            "message": f"Successfully processed {github_event} event"
        })

    except Exception as e:
        logger.error("error processing github webhook", error=str(e), exc_info=True)
        return JSONResponse(status_code=500, content={
            "success": False,
            "message": "Error processing GitHub webhook",
            "error": str(e)
        })

async def handle_push_event(event: PushEvent, store: CommitLogStore, doc_sync: DocSyncClient) -> int:
    """log every commit of a push and mirror the push to the document"""
    if not event.commits:
        logger.info("push event contains no commits", repository=event.repository.full_name)
        return 0

    logger.info("processing push commits", count=len(event.commits), pusher=event.pusher.name,
                repository=event.repository.full_name, branch=event.branch)

    loop = asyncio.get_event_loop()
    records = event.to_records()
    for record in records:
        await loop.run_in_executor(None, store.append, record)

    content = format_push_header(event, utc_timestamp())
    content += "".join(format_plaintext(record) for record in records)

    synced = await loop.run_in_executor(None, doc_sync.try_append_text, content)
    if synced:
        logger.info("synced push to google docs", count=len(records))
    elif doc_sync.enabled:
        logger.warning("failed to sync push to google docs, continuing", reason=synced.reason)

    logger.info("commit details logged", count=len(records))
    return len(records)
