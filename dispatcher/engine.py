import requests as rq
from .exception import ExecutionError
from .utils import logger


class ExecutionClient:
    '''
    Client of the external execution engine
    '''

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def execute(self, language: str, code: str) -> str:
        '''
        Run `code` and return whatever the engine printed
        '''
        logger().debug(f'send code to engine [language={language}]')
        try:
            resp = rq.post(
                f'{self.base_url}/execute',
                json={
                    'language': language,
                    'code': code,
                },
            )
        except rq.RequestException as e:
            raise ExecutionError(f'cannot reach execution engine: {e}') from e
        if not resp.ok:
            raise ExecutionError(
                f'execution engine error [code={resp.status_code}, text={resp.text}]'
            )
        try:
            output = resp.json()['output']
        except (ValueError, KeyError, TypeError) as e:
            raise ExecutionError(f'invalid engine response: {resp.text}') from e
        if not isinstance(output, str):
            raise ExecutionError(f'invalid engine output type: {type(output)}')
        return output
