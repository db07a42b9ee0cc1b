from pydantic import BaseModel
from typing import Any, Optional

class OperationResult(BaseModel):
    """outcome of a best-effort call that falls back instead of raising"""
    ok: bool
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str, value: Any = None) -> "OperationResult":
        return cls(ok=False, value=value, reason=reason)

    def __bool__(self) -> bool:
        return self.ok

    class Config:
        frozen = True
