from fastapi import Depends
from rq import Queue

from publisher.config import Settings, get_settings
from publisher.queue import get_queue
from publisher.transport import LocalPublishTransport


def get_app_settings() -> Settings:
    return get_settings()


def get_transport(config: Settings = Depends(get_app_settings)) -> LocalPublishTransport:
    """Build a transport bound to the configured output root for one request."""
    return LocalPublishTransport(config)


def get_publish_queue() -> Queue:
    return get_queue()
