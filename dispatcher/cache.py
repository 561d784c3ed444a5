import redis
from .constant import RESULT_TTL
from .exception import CacheWriteError


class ResultCache:
    '''
    Transient store for run output, read back by pid elsewhere
    '''

    def __init__(self, client: redis.Redis, ttl: int = RESULT_TTL):
        self.client = client
        self.ttl = ttl

    def set(self, key: str, value: str):
        # last write wins, the ttl restarts on overwrite
        try:
            self.client.setex(key, self.ttl, value)
        except redis.RedisError as e:
            raise CacheWriteError(f'cannot cache output [key={key}]: {e}') from e
