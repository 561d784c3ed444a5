import pytest
from dispatcher.codegen import generate_code
from dispatcher.exception import GenerationError
from tests.request_generator import PYTHON_TEMPLATE


def test_user_code_replaces_marker():
    code = generate_code('python', 'def solve():\n    return 2', PYTHON_TEMPLATE)
    assert code.startswith('import json\ndef solve():\n    return 2\n')
    assert '{{USER_CODE}}' not in code


@pytest.mark.parametrize(
    'template',
    [
        '',
        'print(solve())',
        '{{USER_CODE}}\n{{USER_CODE}}',
    ],
)
def test_invalid_template(template):
    with pytest.raises(GenerationError):
        generate_code('python', 'x = 1', template)
