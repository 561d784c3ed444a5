import json
import os
import queue
import threading
from typing import Dict, Optional
from .ingestor import StreamIngestor
from .worker import RequestWorker
from .utils import logger


def load_config(path: str) -> dict:
    config = {}
    if os.path.exists(path):
        with open(path) as f:
            config = json.load(f)
    return config


class Dispatcher(threading.Thread):
    '''
    Merge every request stream into one channel and start a worker per request.

    With `max_worker_count=None` the fan-out is unbounded: a new worker
    thread is started for each request as soon as it arrives. Any positive
    number caps the running workers, and further requests wait in the
    channel (and so in the streams) until one finishes.
    '''

    # seconds to wait on an empty channel before checking the run flag
    GET_TIMEOUT = 1

    def __init__(
        self,
        sources: Dict[str, object],
        worker: RequestWorker,
        max_worker_count: Optional[int] = None,
        queue_size: int = 16,
    ):
        super().__init__(name='dispatcher', daemon=True)
        # flag to decided whether the thread should run
        self.do_run = True
        # shared channel, type Queue[ExecutionRequest]
        self.QUEUE_SIZE = queue_size
        self.queue = queue.Queue(self.QUEUE_SIZE)
        self.ingestors = [
            StreamIngestor(name, reader, self.queue)
            for name, reader in sources.items()
        ]
        self.worker = worker
        # admission
        if max_worker_count is not None and max_worker_count <= 0:
            raise ValueError('max_worker_count must be positive')
        self.MAX_WORKER_COUNT = max_worker_count
        self.slots = None
        if max_worker_count is not None:
            self.slots = threading.BoundedSemaphore(max_worker_count)
        self.worker_count = 0
        self.count_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config_path: str,
        sources: Dict[str, object],
        worker: RequestWorker,
    ) -> 'Dispatcher':
        config = load_config(config_path)
        return cls(
            sources=sources,
            worker=worker,
            max_worker_count=config.get('MAX_WORKER_COUNT'),
            queue_size=config.get('QUEUE_SIZE', 16),
        )

    def start(self):
        for ingestor in self.ingestors:
            ingestor.start()
        super().start()

    def run(self):
        logger().debug('start dispatcher loop')
        while self.do_run:
            try:
                request = self.queue.get(timeout=self.GET_TIMEOUT)
            except queue.Empty:
                continue
            self.dispatch(request)
        logger().debug('exit dispatcher loop')

    def dispatch(self, request):
        '''
        Start a worker thread for `request` without waiting for it
        '''
        if self.slots is not None:
            # no space for a new worker now
            while not self.slots.acquire(timeout=self.GET_TIMEOUT):
                if not self.do_run:
                    logger().info(
                        f'dispatcher stopped, drop request [pid={request.pid}]'
                    )
                    return None
        logger().debug(f'dispatch request [pid={request.pid}]')
        with self.count_lock:
            self.worker_count += 1
        thread = threading.Thread(
            target=self.handle,
            args=(request, ),
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            logger().error(
                f'cannot start worker, drop request [pid={request.pid}]: {e}')
            self.release_slot()
            return None
        return thread

    def handle(self, request):
        try:
            self.worker.process(request)
        finally:
            self.release_slot()

    def release_slot(self):
        with self.count_lock:
            self.worker_count -= 1
        if self.slots is not None:
            self.slots.release()

    def stop(self):
        for ingestor in self.ingestors:
            ingestor.stop()
            # a running ingestor closes its reader when the loop exits
            if ingestor.ident is None:
                ingestor.reader.close()
        self.do_run = False

    @property
    def load(self) -> Optional[float]:
        if self.MAX_WORKER_COUNT is None:
            return None
        return self.worker_count / self.MAX_WORKER_COUNT

    def status(self):
        return {
            'queueSize': self.queue.qsize(),
            'maxQueueSize': self.QUEUE_SIZE,
            'workerCount': self.worker_count,
            'maxWorkerCount': self.MAX_WORKER_COUNT,
            'running': self.do_run,
            'ingestors': {
                ingestor.source: ingestor.status()
                for ingestor in self.ingestors
            },
            'outcomes': self.worker.stats.snapshot(),
        }
