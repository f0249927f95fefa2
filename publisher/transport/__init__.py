"""Hosting backends that published builds are written to."""

from .base import PublishError, PublishTransport, TransportConfigError  # noqa: F401
from .local import LocalPublishTransport  # noqa: F401
