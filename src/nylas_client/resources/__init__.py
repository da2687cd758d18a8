"""
API resources.
"""

from nylas_client.resources.deltas import Deltas
from nylas_client.resources.events import Events
from nylas_client.resources.threads import Threads

__all__ = [
    "Deltas",
    "Events",
    "Threads",
]
