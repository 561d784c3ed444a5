import enum

# run output lives 3 minutes in cache
RESULT_TTL = 180
# marker in problem templates replaced by requester code
USER_CODE_MARKER = '{{USER_CODE}}'


class RequestType(str, enum.Enum):
    RUN = 'run'
    SUBMIT = 'submit'


class Counter(str, enum.Enum):
    CORRECT = 'submissions.correct'
    WRONG = 'submissions.wrong'

    @classmethod
    def from_status(cls, status: bool) -> 'Counter':
        return cls.CORRECT if status else cls.WRONG
