"""External integration adapters."""

from .n8n import N8NClient

__all__ = [
    "N8NClient",
]
