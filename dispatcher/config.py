import os

# kafka config
KAFKA_BROKER = os.getenv(
    'KAFKA_BROKER',
    'kafka:9092',
)
RUN_TOPIC = os.getenv(
    'RUN_TOPIC',
    'code-run-request',
)
RUN_GROUP = os.getenv(
    'RUN_GROUP',
    'run-group',
)
SUBMIT_TOPIC = os.getenv(
    'SUBMIT_TOPIC',
    'code-submission-request',
)
SUBMIT_GROUP = os.getenv(
    'SUBMIT_GROUP',
    'submission-group',
)
# execution engine
EXECUTION_API = os.getenv(
    'EXECUTION_API',
    'http://code-runner:8080',
)
# result cache
REDIS_URL = os.getenv(
    'REDIS_URL',
    'redis://redis:6379/0',
)
# problem and submission storage
MONGO_URI = os.getenv(
    'MONGO_URI',
    'mongodb://mongo:27017',
)
MONGO_DB = os.getenv(
    'MONGO_DB',
    'code-realm',
)
PROBLEM_COLLECTION = os.getenv(
    'PROBLEM_COLLECTION',
    'codeques',
)
SUBMISSION_COLLECTION = os.getenv(
    'SUBMISSION_COLLECTION',
    'submissions',
)
# token for detailed status
DISPATCHER_TOKEN = os.getenv(
    'DISPATCHER_TOKEN',
    'KoNoDispatcherDa',
)
