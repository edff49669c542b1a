"""
Primitives every other stream is built from, the accessors combinators use to
look at a stream, and the eager consumers that walk a stream to its end.

The eager consumers (flush, length, to_list) never return on an infinite
stream. Bound such a stream with `take` first.
"""

from errors import InvalidArgument
from functional_data_structures import Stream, EmptyStream

EMPTY = EmptyStream()


def make_deferred(thunk):
    return Stream(thunk)


def cons(head, tail):
    return Stream(lambda: (head, tail))


def delay(factory):
    """Stream whose cells are those of the stream returned by factory().

    factory is not called before the returned stream is forced.
    """

    def thunk():
        stream = factory()
        if stream.is_empty():
            return None
        return stream.first(), stream.rest()

    return Stream(thunk)


def force(stream):
    return stream.force()


def is_empty(stream):
    return stream.is_empty()


def first(stream):
    return stream.first()


def rest(stream):
    return stream.rest()


def flush(stream):
    """force every cell of the stream for its side effects"""
    while not stream.is_empty():
        stream = stream.rest()


def length(stream):
    n = 0
    while not stream.is_empty():
        n += 1
        stream = stream.rest()
    return n


def element_at(stream, n):
    """the n-th element (counting from 0), or None past the end"""
    if n < 0:
        raise InvalidArgument("negative index {}".format(n))
    for _ in range(n):
        if stream.is_empty():
            return None
        stream = stream.rest()
    return stream.first()


def to_list(stream):
    return list(stream)
