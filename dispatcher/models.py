from datetime import datetime, timezone
from typing import Optional
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    model_validator,
)
from .constant import RequestType
from .exception import DecodeError, RoutingError


class ExecutionRequest(BaseModel):
    language: str = Field(min_length=1)
    code: str
    pid: str = Field(min_length=1)
    reqType: RequestType
    queId: Optional[str] = None
    email: Optional[str] = None

    @model_validator(mode='after')
    def validate_problem_id(self):
        if self.reqType == RequestType.SUBMIT and not self.queId:
            raise ValueError('submit request must carry a queId')
        return self

    @property
    def is_submit(self) -> bool:
        return self.reqType == RequestType.SUBMIT


def decode(value: Optional[bytes]) -> ExecutionRequest:
    '''
    Decode a stream payload into an execution request

    Raises:
        DecodeError: the payload is empty, not JSON,
            or does not describe a valid request
    '''
    if not value:
        raise DecodeError('empty payload')
    try:
        return ExecutionRequest.model_validate_json(value)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


class ProblemTemplate(BaseModel):
    queId: str
    language: str
    template: str


class ResultEnvelope(BaseModel):
    model_config = ConfigDict(extra='allow')

    status: StrictBool


def parse_envelope(output: str) -> ResultEnvelope:
    '''
    Read the grading verdict from the engine output of a submit request
    '''
    try:
        return ResultEnvelope.model_validate_json(output)
    except ValidationError as e:
        raise RoutingError(f'malformed result envelope: {e}') from e


class Submission(BaseModel):
    pid: str
    queId: str
    email: Optional[str] = None
    language: str
    code: str
    output: str
    submittedAt: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc))
    # not measured by the engine yet
    runtime: str = '0'
    memory: str = '0'

    @classmethod
    def from_request(
        cls,
        request: ExecutionRequest,
        code: str,
        output: str,
    ) -> 'Submission':
        return cls(
            pid=request.pid,
            queId=request.queId,
            email=request.email,
            language=request.language,
            code=code,
            output=output,
        )
