import redis

from memberhub.config import settings

# only the login/register rate limiter talks to redis; keep its calls short so
# a dead redis costs the request at most one timeout before failing open
redis_client = redis.Redis.from_url(
    settings.redis_url,
    decode_responses=True,
    socket_connect_timeout=settings.redis_timeout_seconds,
    socket_timeout=settings.redis_timeout_seconds,
)

def redis_ping() -> bool:
    try:
        return bool(redis_client.ping())
    except redis.RedisError:
        return False
