"""GitHub webhook signature verification.

GitHub signs the raw request body with HMAC-SHA256 and the shared webhook
secret, and sends ``sha256=<hexdigest>`` in the ``X-Hub-Signature-256``
header. The digest must be computed over the bytes exactly as received; a
parsed and re-serialized body can differ in key order or whitespace.
"""
import hashlib
import hmac
from typing import Optional

SIGNATURE_PREFIX = "sha256="


def compute_signature(raw_body: bytes, shared_secret: str) -> str:
    digest = hmac.new(
        shared_secret.encode("utf-8"),
        raw_body,
        hashlib.sha256,
    ).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify(raw_body: bytes, provided_signature_header: Optional[str], shared_secret: Optional[str]) -> bool:
    """Check a webhook payload against its signature header.

    Args:
        raw_body: Request body bytes as received.
        provided_signature_header: Value of the X-Hub-Signature-256 header.
        shared_secret: The configured webhook secret.

    Returns:
        True only if the header matches the expected signature. Never raises.
    """
    if not shared_secret or not provided_signature_header:
        return False

    expected = compute_signature(raw_body, shared_secret).encode("utf-8")
    try:
        provided = provided_signature_header.encode("utf-8")
    except (AttributeError, UnicodeEncodeError):
        return False

    # a length mismatch is a failure on its own
    if len(expected) != len(provided):
        return False

    # Constant-time comparison to prevent timing attacks
    return hmac.compare_digest(expected, provided)
