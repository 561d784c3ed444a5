import fakeredis
import mongomock
import pytest
from dispatcher.cache import ResultCache
from dispatcher.store import ProblemStore, SubmissionStore
from dispatcher.worker import RequestWorker
from tests.request_generator import FakeEngine, RequestGenerator


@pytest.fixture
def redis_client():
    return fakeredis.FakeStrictRedis(server=fakeredis.FakeServer())


@pytest.fixture
def database():
    return mongomock.MongoClient()['code-realm-test']


@pytest.fixture
def request_generator(database):
    return RequestGenerator(database['codeques'])


@pytest.fixture
def problem_store(database):
    return ProblemStore(database['codeques'])


@pytest.fixture
def submission_store(database):
    return SubmissionStore(database['submissions'])


@pytest.fixture
def cache(redis_client):
    return ResultCache(redis_client)


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def worker(problem_store, submission_store, cache, engine):
    return RequestWorker(
        problem_store=problem_store,
        submission_store=submission_store,
        cache=cache,
        engine=engine,
    )
