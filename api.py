import logging
import os
import re
from collections.abc import Iterable, Sequence
from operator import attrgetter

from core import EMPTY, cons, delay, make_deferred
from errors import InvalidArgument
from functional_data_structures import Stream
from stream import concatenate, stream_map

logger = logging.getLogger(__name__)


def stream_of(sequence, start=0):
    """Stream over an indexable finite sequence, one unit at a time.

    For example:
        to_list(stream_of("abc")) == ['a', 'b', 'c']
    """

    def thunk():
        if start >= len(sequence):
            return None
        return sequence[start], stream_of(sequence, start + 1)

    return make_deferred(thunk)


def from_iterable(iterable):
    """stream over an external cursor; every new cell advances it once

    An exception raised by the cursor is raised again by every later pull, so
    retrying a failed cell fails again instead of ending the stream.
    """
    iterator = iter(iterable)
    failure = []

    def pull():
        def thunk():
            if failure:
                raise failure[0]
            try:
                item = next(iterator)
            except StopIteration:
                return None
            except Exception as error:
                failure.append(error)
                raise
            return item, pull()

        return make_deferred(thunk)

    return pull()


def from_generator(func, *args, **kwargs):
    """stream over the items of a generator function, started on first force"""

    def start():
        logger.debug("starting generator %s", getattr(func, '__name__', func))
        return from_iterable(func(*args, **kwargs))

    return delay(start)


def from_range(start=0, stop=None, step=1):
    """integers from start to stop (exclusive), or without end if stop is None"""
    if step == 0:
        raise InvalidArgument("range step must not be zero")

    def thunk():
        if stop is not None and (start >= stop if step > 0 else start <= stop):
            return None
        return start, from_range(start + step, stop, step)

    return make_deferred(thunk)


def from_lines(fileobj):
    """stream over the lines of a text buffer, read one line per cell"""

    def thunk():
        line = fileobj.readline()
        if not line:
            return None
        return line, from_lines(fileobj)

    return make_deferred(thunk)


def from_matches(pattern, string, flags=0, pos=0):
    """stream of the match objects of successive searches for pattern in string"""
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    elif flags:
        raise InvalidArgument("cannot pass flags with a compiled pattern")

    def thunk():
        if pos > len(string):
            return None
        match = pattern.search(string, pos)
        if match is None:
            return None
        following = match.end() if match.end() > match.start() else match.end() + 1
        return match, from_matches(pattern, string, pos=following)

    return make_deferred(thunk)


def from_directory(path):
    """paths below a directory in pre-order, sorted by name within each directory

    Symbolic links to directories are listed but not followed.
    """

    def listing():
        logger.debug("listing directory %s", path)
        with os.scandir(path) as entries:
            children = sorted(entries, key=attrgetter('name'))
        return concatenate(stream_map(_subtree, stream_of(children)))

    return delay(listing)


def _subtree(entry):
    if entry.is_dir(follow_symlinks=False):
        return cons(entry.path, from_directory(entry.path))
    return cons(entry.path, EMPTY)


def to_stream(source):
    """convert a stream, generator function, sequence or iterable into a stream"""
    if isinstance(source, Stream):
        return source
    elif callable(source):
        return from_generator(source)
    elif isinstance(source, Sequence):
        return stream_of(source)
    elif isinstance(source, Iterable):
        return from_iterable(source)
    else:
        raise TypeError("cannot convert '{}' object to a stream".format(type(source).__name__))
