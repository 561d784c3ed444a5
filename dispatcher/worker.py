import textwrap
from typing import Callable, Optional
from . import codegen
from .cache import ResultCache
from .engine import ExecutionClient
from .exception import (
    AggregateError,
    CacheWriteError,
    DispatchError,
)
from .job import Job, JobState, Stats
from .models import (
    ExecutionRequest,
    Submission,
    parse_envelope,
)
from .store import ProblemStore, SubmissionStore
from .utils import logger


def shorten(s: str) -> str:
    return textwrap.shorten(s or '', 37, placeholder='...')


class RequestWorker:
    '''
    Carry one execution request from the stream to its destination.

    run:    execute -> cache the output under the request pid
    submit: resolve template -> generate code -> execute
            -> persist the submission -> update problem counters

    Every failure ends the request; it is logged and never retried.
    '''

    def __init__(
        self,
        problem_store: ProblemStore,
        submission_store: SubmissionStore,
        cache: ResultCache,
        engine: ExecutionClient,
        generate_code: Callable[[str, str, str], str] = codegen.generate_code,
        stats: Optional[Stats] = None,
    ):
        self.problem_store = problem_store
        self.submission_store = submission_store
        self.cache = cache
        self.engine = engine
        self.generate_code = generate_code
        self.stats = stats if stats is not None else Stats()

    def process(self, request: ExecutionRequest) -> Job:
        job = Job(request=request)
        logger().info(
            f'receive request [pid={request.pid}, type={request.reqType.value}]'
        )
        try:
            if request.is_submit:
                self.prepare(job)
            self.execute(job)
            if request.is_submit:
                self.store_submission(job)
            else:
                self.store_output(job)
            job.advance(JobState.DONE)
        except AggregateError as e:
            # the submission stays, counters are one behind
            job.error = e.kind
            job.advance(JobState.DONE)
            logger().error(
                f'submission persisted but counters not updated'
                f' [pid={request.pid}, queId={request.queId}]: {e}')
        except DispatchError as e:
            job.abort(e.kind)
            logger().error(
                f'abort request [pid={request.pid}, error={e.kind}]: {e}')
        except Exception as e:
            job.abort('unexpected')
            logger().exception(
                f'unexpected error [pid={request.pid}]: {e}')
        self.stats.record(job)
        logger().info(f'finish request [pid={request.pid}, state={job.state.value}]')
        return job

    def prepare(self, job: Job):
        request = job.request
        problem = self.problem_store.get_template(
            request.queId,
            request.language,
        )
        job.advance(JobState.TEMPLATE_RESOLVED)
        job.code = self.generate_code(
            request.language,
            request.code,
            problem.template,
        )
        job.advance(JobState.CODE_READY)

    def execute(self, job: Job):
        job.output = self.engine.execute(job.request.language, job.code)
        logger().debug(
            f'engine output [pid={job.request.pid}]: {shorten(job.output)}')
        job.advance(JobState.EXECUTED)

    def store_output(self, job: Job):
        try:
            self.cache.set(job.request.pid, job.output)
        except CacheWriteError as e:
            job.error = e.kind
            logger().error(str(e))
        job.advance(JobState.ROUTED)

    def store_submission(self, job: Job):
        request = job.request
        envelope = parse_envelope(job.output)
        submission = Submission.from_request(request, job.code, job.output)
        logger().info(
            f'store submission [pid={request.pid}, queId={request.queId}]')
        self.submission_store.insert(submission)
        job.advance(JobState.ROUTED)
        counter = self.problem_store.increment(request.queId, envelope.status)
        logger().debug(
            f'increase {counter.value} [queId={request.queId}]')
