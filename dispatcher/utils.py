import logging
import pymongo
import redis
from flask import current_app
from .config import (
    MONGO_DB,
    MONGO_URI,
    REDIS_URL,
)


def logger() -> logging.Logger:
    try:
        return current_app.logger
    except RuntimeError:
        return logging.getLogger('gunicorn.error')


# Redis connection pool
redis_pool = None


def get_redis_client() -> redis.Redis:
    # Create connection pool
    global redis_pool
    if redis_pool is None:
        logger().debug(f'Try connecting redis [url={REDIS_URL}]')
        redis_pool = redis.ConnectionPool.from_url(REDIS_URL)
    return redis.Redis(connection_pool=redis_pool)


def get_mongo_database(
    uri: str = MONGO_URI,
    name: str = MONGO_DB,
):
    logger().debug(f'Try connecting mongo [uri={uri}, db={name}]')
    return pymongo.MongoClient(uri)[name]
