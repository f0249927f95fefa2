"""
Application package for the build publisher service.

The transport layer places build artifacts into the output root, the service
layer keeps the updates manifest in step, and the API and queue worker expose
publishing to other processes.
"""

from .config import settings  # noqa: F401  (re-export for convenience)
