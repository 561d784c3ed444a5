from .constant import USER_CODE_MARKER
from .exception import GenerationError


def generate_code(language: str, code: str, template: str) -> str:
    '''
    Combine requester code with the problem's driver template.

    The template holds the harness that reads the testcases and prints
    the verdict envelope; exactly one marker in it is replaced with the
    requester code.

    Args:
        language: language of both the code and the template
        code: requester source code
        template: the problem template for `language`
    Returns:
        the final source code sent to the execution engine
    '''
    if not template:
        raise GenerationError(f'empty {language} template')
    marker_count = template.count(USER_CODE_MARKER)
    if marker_count == 0:
        raise GenerationError(f'no code marker in {language} template')
    if marker_count > 1:
        raise GenerationError(
            f'{marker_count} code markers in {language} template')
    return template.replace(USER_CODE_MARKER, code)
