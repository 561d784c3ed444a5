import json
import secrets
import threading
import time
from typing import Callable, Dict, List, Optional, Union
from bson import ObjectId
from dispatcher.exception import ExecutionError

PYTHON_TEMPLATE = '''import json
{{USER_CODE}}
print(json.dumps({"status": solve() == 2}))
'''


class RequestGenerator:

    def __init__(self, problem_collection=None):
        self.problem_collection = problem_collection

    def gen_pid(self) -> str:
        return secrets.token_hex(6)

    def gen_problem(
        self,
        templates: Optional[Dict[str, str]] = None,
    ) -> str:
        '''
        insert a problem document and return its id
        '''
        _id = ObjectId()
        if templates is None:
            templates = {'python': PYTHON_TEMPLATE}
        self.problem_collection.insert_one({
            '_id': _id,
            'problemId': str(_id),
            'templates': templates,
            'submissions': {
                'correct': 0,
                'wrong': 0,
            },
        })
        return str(_id)

    def gen_payload(self, req_type: str = 'run', **ks) -> dict:
        payload = {
            'language': 'python',
            'code': 'def solve():\n    return 1 + 1',
            'pid': self.gen_pid(),
            'reqType': req_type,
            'queId': '',
            'email': 'noj@example.com',
        }
        payload.update(ks)
        return payload

    def gen_message(self, req_type: str = 'run', **ks) -> bytes:
        return json.dumps(self.gen_payload(req_type, **ks)).encode()


class FakeMessage:
    '''
    The part of confluent_kafka.Message the ingestor reads
    '''

    def __init__(self, value: Optional[bytes] = None, error: Optional[str] = None):
        self._value = value
        self._error = error

    def value(self):
        return self._value

    def error(self):
        return self._error


def read_error() -> FakeMessage:
    return FakeMessage(error='Local: Broker transport failure')


class FakeReader:
    '''
    Deliver pre-loaded payloads the way a kafka consumer polls them
    '''

    def __init__(self, payloads: List[Union[bytes, FakeMessage]] = ()):
        self.pending = list(payloads)
        self.lock = threading.Lock()
        self.closed = False

    def feed(self, payload):
        with self.lock:
            self.pending.append(payload)

    def poll(self, timeout=None):
        with self.lock:
            payload = self.pending.pop(0) if self.pending else None
        if payload is None:
            time.sleep(0.01)
            return None
        if isinstance(payload, FakeMessage):
            return payload
        return FakeMessage(payload)

    def close(self):
        self.closed = True


class FakeEngine:
    '''
    Execution engine answering with a fixed output or a function of the code
    '''

    def __init__(
        self,
        output: Union[str, Callable[[str, str], str]] = '',
        fail: bool = False,
    ):
        self.output = output
        self.fail = fail
        self.calls = []
        self.lock = threading.Lock()

    def execute(self, language: str, code: str) -> str:
        with self.lock:
            self.calls.append((language, code))
        if self.fail:
            raise ExecutionError('engine unavailable')
        if callable(self.output):
            return self.output(language, code)
        return self.output


def wait_until(predicate, timeout: float = 5) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()
