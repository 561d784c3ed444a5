import json
import pytest
from dispatcher.constant import RequestType
from dispatcher.exception import DecodeError, RoutingError
from dispatcher.models import decode, parse_envelope


def test_decode_run_request(request_generator):
    payload = request_generator.gen_payload('run', pid='abc123')
    request = decode(json.dumps(payload).encode())
    assert request.pid == 'abc123'
    assert request.reqType == RequestType.RUN
    assert not request.is_submit


def test_decode_submit_request(request_generator):
    que_id = request_generator.gen_problem()
    request = decode(request_generator.gen_message('submit', queId=que_id))
    assert request.is_submit
    assert request.queId == que_id


@pytest.mark.parametrize(
    'value',
    [
        None,
        b'',
        b'not json',
        b'[1, 2, 3]',
        b'{"language": "python", "code": "print(1)"}',
        b'{"language": "python", "code": "", "pid": "p", "reqType": "debug"}',
        b'{"language": "python", "code": "", "pid": "p", "reqType": "submit"}',
    ],
)
def test_decode_malformed_payload(value):
    with pytest.raises(DecodeError):
        decode(value)


def test_envelope_keeps_status():
    assert parse_envelope('{"status": true, "passed": 3}').status is True
    assert parse_envelope('{"status": false}').status is False


@pytest.mark.parametrize(
    'output',
    [
        '1\n',
        '{}',
        '{"status": "true"}',
        '{"status": 1}',
        '[true]',
    ],
)
def test_envelope_without_boolean_status(output):
    with pytest.raises(RoutingError):
        parse_envelope(output)
