"""
Lazy combinators.

Every combinator returns a new stream whose thunk closes over its inputs.
Nothing is forced when the combinator is called; even the question whether an
input is empty is asked only inside the thunk, when the output is forced.
Arguments are validated eagerly.

scan threads its accumulator through the closures of the cells it creates,
so the output is correct in whatever order its cells are forced.
"""

from core import EMPTY, cons, make_deferred, delay
from errors import InvalidArgument


def _check_count(n):
    if n < 0:
        raise InvalidArgument("negative count {}".format(n))


def stream_map(func, stream, *streams):
    """apply func element-wise; with several streams, stop at the shortest"""
    if streams:
        return _map_many(func, (stream,) + streams)

    def thunk():
        if stream.is_empty():
            return None
        return func(stream.first()), stream_map(func, stream.rest())

    return make_deferred(thunk)


def _map_many(func, streams):
    def thunk():
        if any(s.is_empty() for s in streams):
            return None
        return (func(*(s.first() for s in streams)),
                _map_many(func, tuple(s.rest() for s in streams)))

    return make_deferred(thunk)


def stream_filter(pred, stream):
    def thunk():
        s = stream
        while not s.is_empty():
            head = s.first()
            if pred(head):
                return head, stream_filter(pred, s.rest())
            s = s.rest()
        return None

    return make_deferred(thunk)


def take(n, stream):
    _check_count(n)
    if n == 0:
        return EMPTY

    def thunk():
        if stream.is_empty():
            return None
        return stream.first(), take(n - 1, stream.rest())

    return make_deferred(thunk)


def drop(n, stream):
    _check_count(n)

    def skipped():
        s = stream
        for _ in range(n):
            if s.is_empty():
                break
            s = s.rest()
        return s

    return delay(skipped)


def take_while(pred, stream):
    def thunk():
        if stream.is_empty():
            return None
        head = stream.first()
        if not pred(head):
            return None
        return head, take_while(pred, stream.rest())

    return make_deferred(thunk)


def drop_while(pred, stream):
    def skipped():
        s = stream
        while not s.is_empty() and pred(s.first()):
            s = s.rest()
        return s

    return delay(skipped)


def append(*streams):
    """concatenate the streams in argument order"""

    def thunk():
        for i, s in enumerate(streams):
            if not s.is_empty():
                return s.first(), append(s.rest(), *streams[i + 1:])
        return None

    return make_deferred(thunk)


def concatenate(streams):
    """flatten a stream of streams"""

    def thunk():
        outer = streams
        while not outer.is_empty():
            inner = outer.first()
            if not inner.is_empty():
                return inner.first(), concatenate(cons(inner.rest(), outer.rest()))
            outer = outer.rest()
        return None

    return make_deferred(thunk)


def scan(func, init, stream):
    """running fold: init, func(init, s0), func(func(init, s0), s1), ..."""
    return make_deferred(lambda: (init, _scan_tail(func, init, stream)))


def _scan_tail(func, acc, stream):
    def thunk():
        if stream.is_empty():
            return None
        value = func(acc, stream.first())
        return value, _scan_tail(func, value, stream.rest())

    return make_deferred(thunk)


def iterate(func, value):
    """infinite stream value, func(value), func(func(value)), ..."""
    return make_deferred(lambda: (value, _iterate_tail(func, value)))


def _iterate_tail(func, value):
    def thunk():
        following = func(value)
        return following, _iterate_tail(func, following)

    return make_deferred(thunk)


def subrange(stream, start, end=None):
    """elements start (inclusive) to end (exclusive); all of the rest if end is None"""
    if start < 0:
        raise InvalidArgument("negative start {}".format(start))
    if end is None:
        return drop(start, stream)
    if end < start:
        raise InvalidArgument("end {} before start {}".format(end, start))
    return take(end - start, drop(start, stream))
