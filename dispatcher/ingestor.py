import queue
import threading
from confluent_kafka import KafkaException
from .exception import DecodeError
from .models import decode
from .utils import logger


class StreamIngestor(threading.Thread):
    '''
    Read one request stream and hand decoded requests to the dispatcher

    `reader` is a kafka consumer, or anything with its `poll(timeout)`
    and `close()`.
    '''

    # seconds
    POLL_TIMEOUT = 1
    # seconds between retries when the channel is full
    PUT_TIMEOUT = 1

    def __init__(
        self,
        name: str,
        reader,
        channel: queue.Queue,
    ):
        super().__init__(name=f'ingestor-{name}', daemon=True)
        self.source = name
        self.reader = reader
        self.channel = channel
        # flag to decided whether the thread should run
        self.do_run = True
        self.received = 0
        self.discarded = 0

    def run(self):
        logger().debug(f'start ingestor loop [source={self.source}]')
        try:
            while self.do_run:
                self.poll()
        finally:
            self.reader.close()
            logger().debug(f'exit ingestor loop [source={self.source}]')

    def poll(self):
        try:
            message = self.reader.poll(self.POLL_TIMEOUT)
        except KafkaException as e:
            logger().error(
                f'error reading message [source={self.source}]: {e}')
            return
        # nothing arrived in time
        if message is None:
            return
        if message.error():
            logger().error(
                f'error reading message [source={self.source}]: {message.error()}'
            )
            return
        self.ingest(message.value())

    def ingest(self, value) -> bool:
        '''
        Decode one payload and push it into the channel

        Returns:
            whether the payload reached the channel
        '''
        self.received += 1
        try:
            request = decode(value)
        except DecodeError as e:
            self.discarded += 1
            logger().error(
                f'discard malformed message [source={self.source}]: {e}')
            return False
        # block until there is room, but keep honoring stop()
        while self.do_run:
            try:
                self.channel.put(request, timeout=self.PUT_TIMEOUT)
                return True
            except queue.Full:
                continue
        logger().info(
            f'ingestor stopped, drop request [source={self.source}, pid={request.pid}]'
        )
        return False

    def stop(self):
        self.do_run = False

    def status(self):
        return {
            'running': self.is_alive(),
            'received': self.received,
            'discarded': self.discarded,
        }
