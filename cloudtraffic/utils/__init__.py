"""Small helpers shared by the HTTP layer."""

__all__ = ["asyncio_utils"]
