"""
Application layer hosting a client inside an asyncio program.
"""

from .service import PollingService

__all__ = [
    "PollingService",
]
