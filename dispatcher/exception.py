__all__ = [
    'DispatchError',
    'DecodeError',
    'ProblemLookupError',
    'GenerationError',
    'ExecutionError',
    'RoutingError',
    'PersistenceError',
    'CacheWriteError',
    'AggregateError',
    'AggregateStoreError',
    'AggregateNotMatchedError',
]


class DispatchError(Exception):
    '''
    Base class of every error that terminates a single request
    '''
    kind = 'dispatch'


class DecodeError(DispatchError):
    kind = 'decode'


class ProblemLookupError(DispatchError):
    kind = 'lookup'


class GenerationError(DispatchError):
    kind = 'generation'


class ExecutionError(DispatchError):
    kind = 'execution'


class RoutingError(DispatchError):
    kind = 'routing'


class PersistenceError(DispatchError):
    kind = 'persistence'


class CacheWriteError(DispatchError):
    kind = 'cache'


class AggregateError(DispatchError):
    '''
    The submission is already persisted when this is raised,
    so the counters are behind by one.
    '''
    kind = 'aggregate'


class AggregateStoreError(AggregateError):
    '''
    The increment itself failed (driver / connection error)
    '''
    kind = 'aggregate.store'


class AggregateNotMatchedError(AggregateError):
    '''
    The increment was accepted but no problem document was modified
    '''
    kind = 'aggregate.not-matched'
