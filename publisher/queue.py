from redis import Redis
from rq import Queue

from publisher.config import settings


def get_queue() -> Queue:
    """Return the publish RQ queue using configured Redis connection."""
    connection = Redis.from_url(str(settings.redis_url))
    return Queue("publish", connection=connection)
