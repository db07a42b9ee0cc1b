from commit_relay.core.config import Settings
from commit_relay.services.ai_service import AIService
from commit_relay.services.docs_sync import DocSyncClient
from commit_relay.services.log_store import CommitLogStore
from fastapi import Request

#services are built once in create_app and kept on app.state

def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings

def get_log_store(request: Request) -> CommitLogStore:
    return request.app.state.log_store

def get_doc_sync(request: Request) -> DocSyncClient:
    return request.app.state.doc_sync

def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service
