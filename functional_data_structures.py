import threading
from collections import namedtuple

from errors import Immutable, InvalidArgument, InvalidProducer, ReentrantForce

REPR_LIMIT = 10

Pending = namedtuple('Pending', 'thunk')
Forced = namedtuple('Forced', 'head tail is_empty')

END = Forced(None, None, True)


class Singleton:
    """Class with a single instance"""

    def __new__(cls):
        obj = object.__new__(cls)
        cls.__new__ = lambda _: obj
        return obj


def settle(result):
    """Turn the value returned by a thunk into the forced state of a cell."""
    if result is None:
        return END
    if isinstance(result, tuple) and len(result) == 2 and isinstance(result[1], Stream):
        return Forced(result[0], result[1], False)
    raise InvalidProducer(result)


class Stream:
    """Lazily evaluated, memoized, singly linked sequence.

    A cell holds either a pending thunk or the forced result of that thunk.
    The thunk takes no arguments and returns either a (head, tail) pair,
    where tail is another Stream, or None to mark the end of the stream.

    The transition from pending to forced happens at most once. If the thunk
    raises, the cell stays pending and a later force runs the thunk again.

    This container type is immutable.
    """

    def __init__(self, thunk):
        if not callable(thunk):
            raise TypeError("'{}' object is not callable".format(type(thunk).__name__))
        object.__setattr__(self, '_state', Pending(thunk))
        object.__setattr__(self, '_lock', threading.Lock())
        object.__setattr__(self, '_owner', None)

    @property
    def is_forced(self):
        return isinstance(self._state, Forced)

    def force(self):
        if isinstance(self._state, Forced):
            return self
        if self._owner == threading.get_ident():
            raise ReentrantForce(self)
        with self._lock:
            state = self._state
            if isinstance(state, Pending):
                object.__setattr__(self, '_owner', threading.get_ident())
                try:
                    result = state.thunk()
                finally:
                    object.__setattr__(self, '_owner', None)
                object.__setattr__(self, '_state', settle(result))
        return self

    def is_empty(self):
        return self.force()._state.is_empty

    def first(self):
        """first element, or None if the stream is empty"""
        return self.force()._state.head

    def rest(self):
        """the stream without its first element; the tail itself is not forced"""
        state = self.force()._state
        if state.is_empty:
            return EmptyStream()
        return state.tail

    def __iter__(self):
        stream = self
        while not stream.is_empty():
            yield stream.first()
            stream = stream.rest()

    def __getitem__(self, index):
        if isinstance(index, slice):
            from stream import subrange
            if index.step not in (None, 1):
                raise InvalidArgument("stream slices do not support step {}".format(index.step))
            return subrange(self, index.start or 0, index.stop)
        if not isinstance(index, int):
            raise TypeError("stream indices must be integers or slices, not {}".format(type(index).__name__))
        if index < 0:
            raise InvalidArgument("negative stream index {}".format(index))
        stream = self
        for _ in range(index):
            stream = stream.rest()
        if stream.is_empty():
            raise IndexError("stream index out of range")
        return stream.first()

    def __setattr__(self, *args, **kwargs):
        raise Immutable("'{}' object does not support attribute assignment".format(type(self).__name__))

    def __delattr__(self, *args, **kwargs):
        raise Immutable("'{}' object does not support attribute deletion".format(type(self).__name__))

    def __setitem__(self, *args, **kwargs):
        raise Immutable("'{}' object does not support item assignment".format(type(self).__name__))

    def __delitem__(self, *args, **kwargs):
        raise Immutable("'{}' object does not support item deletion".format(type(self).__name__))

    def __copy__(self):
        return self

    def __deepcopy__(self, memodict={}):
        return self

    def __repr__(self):
        items = []
        stream = self
        while stream.is_forced and not stream._state.is_empty:
            if len(items) == REPR_LIMIT:
                break
            items.append(repr(stream._state.head))
            stream = stream._state.tail
        if not stream.is_forced or not stream._state.is_empty:
            items.append('...')
        return 'Stream({})'.format(', '.join(items))


class EmptyStream(Singleton, Stream):
    """The empty stream, forced from the start"""

    _state = END
    _lock = None
    _owner = None

    def __init__(self):
        pass
