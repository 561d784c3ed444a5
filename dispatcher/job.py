import enum
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional
from .models import ExecutionRequest


class JobState(enum.Enum):
    RECEIVED = 'received'
    TEMPLATE_RESOLVED = 'template-resolved'
    CODE_READY = 'code-ready'
    EXECUTED = 'executed'
    ROUTED = 'routed'
    DONE = 'done'
    ABORTED = 'aborted'


@dataclass
class Job:
    request: ExecutionRequest
    state: JobState = JobState.RECEIVED
    code: Optional[str] = None
    output: Optional[str] = None
    # kind of the error which aborted / degraded this job
    error: Optional[str] = None

    def __post_init__(self):
        if self.code is None:
            self.code = self.request.code

    def advance(self, state: JobState):
        self.state = state

    def abort(self, kind: str):
        self.state = JobState.ABORTED
        self.error = kind

    @property
    def aborted(self) -> bool:
        return self.state == JobState.ABORTED


@dataclass
class Stats:
    '''
    Outcome counters shared by all workers
    '''
    counts: Counter = field(default_factory=Counter)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def record(self, job: Job):
        with self.lock:
            self.counts[job.state.value] += 1
            if job.error is not None:
                self.counts[f'error.{job.error}'] += 1

    def snapshot(self) -> Dict[str, int]:
        with self.lock:
            return dict(self.counts)
