from commit_relay.core.logging import get_logger
from commit_relay.models.result import OperationResult
from google.oauth2 import service_account
from googleapiclient.discovery import build
from typing import Any, Optional
import os

logger = get_logger(__name__)

DOCS_SCOPES = ["https://www.googleapis.com/auth/documents"]

class DocSyncClient:
    """appends text to the end of a google doc

    Each append reads the document to find its end index and then inserts
    just before it. The read and the write are separate requests, so two
    appends racing on the same document can interleave.
    """

    def __init__(self, document_id: Optional[str], credentials_path: Optional[str], docs_service: Any = None):
        self.document_id = document_id
        self.credentials_path = credentials_path
        self._docs = docs_service

    @property
    def enabled(self) -> bool:
        return bool(self.document_id and self.credentials_path)

    def _docs_service(self):
        #authenticate once per client
        if self._docs is None:
            if not os.path.isfile(self.credentials_path):
                raise FileNotFoundError(f"google credentials file not found at {self.credentials_path}")

            credentials = service_account.Credentials.from_service_account_file(
                self.credentials_path,
                scopes=DOCS_SCOPES
            )
            self._docs = build("docs", "v1", credentials=credentials, cache_discovery=False)
            logger.info("google docs api client initialized")
        return self._docs

    def try_append_text(self, text: str) -> OperationResult:
        if not self.enabled:
            logger.info("google docs integration not configured, skipping sync")
            return OperationResult.failure("google docs integration not configured")

        try:
            docs = self._docs_service()
            document = docs.documents().get(documentId=self.document_id).execute()
            end_index = document["body"]["content"][-1]["endIndex"]

            docs.documents().batchUpdate(
                documentId=self.document_id,
                body={
                    "requests": [
                        {
                            "insertText": {
                                "location": {"index": end_index - 1},
                                "text": text,
                            }
                        }
                    ]
                }
            ).execute()
        except Exception as e:
            logger.error("error appending to google doc", document_id=self.document_id, error=str(e))
            return OperationResult.failure(str(e))

        logger.info("content appended to google doc", document_id=self.document_id, length=len(text))
        return OperationResult.success()

    def append_text(self, text: str) -> bool:
        return self.try_append_text(text).ok
