import os
import logging
import secrets
import redis
from flask import Flask, request, jsonify
from dispatcher.cache import ResultCache
from dispatcher.dispatcher import Dispatcher
from dispatcher.engine import ExecutionClient
from dispatcher.store import ProblemStore, SubmissionStore
from dispatcher.stream import open_sources
from dispatcher.utils import (
    get_mongo_database,
    get_redis_client,
    logger,
)
from dispatcher.worker import RequestWorker
from dispatcher.config import (
    DISPATCHER_TOKEN,
    EXECUTION_API,
    PROBLEM_COLLECTION,
    SUBMISSION_COLLECTION,
)

DISPATCHER_CONFIG = os.getenv(
    'DISPATCHER_CONFIG',
    '.config/dispatcher.json.example',
)


def create_dispatcher() -> Dispatcher:
    redis_client = get_redis_client()
    try:
        logger().info(f'redis ping: {redis_client.ping()}')
    except redis.RedisError as e:
        logger().error(f'cannot ping redis: {e}')
    db = get_mongo_database()
    worker = RequestWorker(
        problem_store=ProblemStore(db[PROBLEM_COLLECTION]),
        submission_store=SubmissionStore(db[SUBMISSION_COLLECTION]),
        cache=ResultCache(redis_client),
        engine=ExecutionClient(EXECUTION_API),
    )
    return Dispatcher.from_config(
        DISPATCHER_CONFIG,
        sources=open_sources(),
        worker=worker,
    )


def create_app(dispatcher: Dispatcher = None):
    os.makedirs('logs', exist_ok=True)
    logging.basicConfig(filename='logs/dispatcher.log')
    app = Flask(__name__)
    if __name__ != '__main__':
        # let flask app use gunicorn's logger
        gunicorn_logger = logging.getLogger('gunicorn.error')
        app.logger.handlers = gunicorn_logger.handlers
        app.logger.setLevel(gunicorn_logger.level)
        logging.getLogger().setLevel(gunicorn_logger.level)
    if dispatcher is None:
        dispatcher = create_dispatcher()
        dispatcher.start()
    app.config['DISPATCHER'] = dispatcher

    @app.get('/status')
    def status():
        ret = {
            'load': dispatcher.load,
        }
        # if token is provided
        if secrets.compare_digest(
                DISPATCHER_TOKEN,
                request.args.get('token', ''),
        ):
            ret.update(dispatcher.status())
        return jsonify(ret), 200

    return app
