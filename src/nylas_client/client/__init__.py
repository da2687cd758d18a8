"""
Client layer - User-facing API.

This module provides:
- NylasClient: Main entry point, including run_batch
- NylasClientBuilder: Fluent client construction
"""

from nylas_client.client.builder import NylasClientBuilder
from nylas_client.client.core import NylasClient

__all__ = [
    "NylasClient",
    "NylasClientBuilder",
]
