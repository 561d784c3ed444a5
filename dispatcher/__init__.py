from .dispatcher import Dispatcher
from .worker import RequestWorker

__all__ = [
    'Dispatcher',
    'RequestWorker',
]
