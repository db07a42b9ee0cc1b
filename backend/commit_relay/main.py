from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from commit_relay.core.config import Settings, get_settings
from commit_relay.core.logging import setup_logging, get_logger, LoggingMiddleware
from commit_relay.services.ai_service import AIService
from commit_relay.services.docs_sync import DocSyncClient
from commit_relay.services.log_store import CommitLogStore
from commit_relay.routers import github_webhook, webhook
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from datetime import datetime, timezone

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    if settings.signature_required:
        logger.info("github webhook signature check enabled")
    else:
        logger.warning("GITHUB_WEBHOOK_SECRET not set, unsigned github payloads are accepted")

    if app.state.doc_sync.enabled:
        logger.info("google docs sync enabled", document_id=settings.GOOGLE_DOCS_ID)
    else:
        logger.info("google docs integration not configured")

    try:
        app.state.log_store.ensure_dir_exists()
    except OSError as e:
        logger.error("logs directory could not be created", logs_dir=settings.LOGS_DIR, error=str(e))

    yield

def create_app(
    settings: Optional[Settings] = None,
    ai_service: Optional[AIService] = None,
    doc_sync: Optional[DocSyncClient] = None,
    log_store: Optional[CommitLogStore] = None
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.log_store = log_store or CommitLogStore(settings.LOGS_DIR)
    app.state.doc_sync = doc_sync or DocSyncClient(settings.GOOGLE_DOCS_ID, settings.GOOGLE_APPLICATION_CREDENTIALS)
    app.state.ai_service = ai_service or AIService(settings)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        github_webhook.router,
        prefix="/api/webhook",
        tags=["github"]
    )
    app.include_router(
        webhook.router,
        prefix="/api",
        tags=["webhook"]
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = "Not Found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": {"message": message}})

    @app.get("/")
    async def root():
        return {"message": "Welcome to the API"}

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "integrations": {
                "github_signature": settings.signature_required,
                "openai": app.state.ai_service.configured,
                "google_docs": app.state.doc_sync.enabled
            }
        }

    return app

def run() -> None:
    settings = get_settings()
    setup_logging(settings.DEBUG)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)

if __name__ == "__main__":
    run()
