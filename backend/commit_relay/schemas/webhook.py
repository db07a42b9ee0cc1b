from pydantic import BaseModel
from typing import Optional, Any, Dict

class WebhookEnvelope(BaseModel):
    event: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

class ContentRequest(BaseModel):
    prompt: Optional[str] = None
    context: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

class ContentResult(BaseModel):
    generated_content: Optional[str]
    model_used: str
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    class Config:
        protected_namespaces = ()

class WebhookResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
