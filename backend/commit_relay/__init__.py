"""commit-relay: commit logging webhooks and a content-request webhook."""

__version__ = "0.1.0"
