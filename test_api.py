import io
import os
import re

import pytest

from api import stream_of, from_iterable, from_generator, from_range, from_lines, from_matches, from_directory, to_stream
from core import EMPTY, first, is_empty, to_list
from errors import InvalidArgument
from stream import take


def test_stream_of_list():
    assert to_list(stream_of([1, 2, 3])) == [1, 2, 3]


def test_stream_of_string_walks_characters():
    assert to_list(stream_of("abc")) == ['a', 'b', 'c']


def test_stream_of_bytes_walks_units():
    assert to_list(stream_of(b"ab")) == [97, 98]


def test_stream_of_empty_sequence():
    assert is_empty(stream_of([]))
    assert is_empty(stream_of(""))


def test_stream_of_sees_sequence_lazily():
    items = [1]
    stream = stream_of(items)
    items.append(2)
    assert to_list(stream) == [1, 2]


def test_from_iterable_advances_cursor_once_per_cell():
    iterator = iter([1, 2, 3])
    stream = from_iterable(iterator)
    assert first(stream) == 1
    assert first(stream) == 1
    assert next(iterator) == 2
    assert to_list(stream) == [1, 3]


def test_from_iterable_infinite():
    def counter():
        n = 0
        while True:
            yield n
            n += 1

    assert to_list(take(3, from_iterable(counter()))) == [0, 1, 2]


def test_from_generator_starts_on_first_force():
    calls = []

    def gen(n):
        calls.append(n)
        yield from range(n)

    stream = from_generator(gen, 3)
    assert calls == []
    assert to_list(stream) == [0, 1, 2]
    assert to_list(stream) == [0, 1, 2]
    assert calls == [3]


def test_from_generator_errors_propagate():
    def broken():
        yield 1
        raise OSError("read failed")

    stream = from_generator(broken)
    assert first(stream) == 1
    with pytest.raises(OSError):
        to_list(stream)


def test_from_generator_retry_after_error_fails_again():
    def broken():
        yield 1
        raise OSError("read failed")

    stream = from_generator(broken)
    with pytest.raises(OSError):
        to_list(stream)
    with pytest.raises(OSError):
        to_list(stream)
    assert first(stream) == 1


def test_from_iterable_retry_after_error_fails_again():
    def items():
        yield 'a'
        raise ValueError("bad record")

    stream = from_iterable(items())
    for _ in range(3):
        with pytest.raises(ValueError):
            to_list(stream)
    assert not stream.rest().is_forced


def test_from_range():
    assert to_list(from_range(2, 5)) == [2, 3, 4]
    assert to_list(from_range(5, 0, -2)) == [5, 3, 1]
    assert to_list(from_range(3, 3)) == []
    assert to_list(take(3, from_range(7))) == [7, 8, 9]
    assert to_list(take(3, from_range())) == [0, 1, 2]


def test_from_range_rejects_zero_step():
    with pytest.raises(InvalidArgument):
        from_range(0, 10, 0)


def test_from_lines():
    buffer = io.StringIO("first\nsecond\nthird")
    assert to_list(from_lines(buffer)) == ["first\n", "second\n", "third"]


def test_from_lines_reads_on_demand():
    buffer = io.StringIO("a\nb\nc\n")
    stream = from_lines(buffer)
    assert first(stream) == "a\n"
    assert buffer.readline() == "b\n"


def test_from_matches():
    matches = from_matches(r'\d+', "a1 b22 c333")
    assert [m.group() for m in matches] == ['1', '22', '333']


def test_from_matches_compiled_pattern_with_flags():
    pattern = re.compile('ab', re.IGNORECASE)
    assert [m.start() for m in from_matches(pattern, "AB ab aB")] == [0, 3, 6]
    assert [m.group() for m in from_matches('x', "aXx", re.IGNORECASE)] == ['X', 'x']


def test_from_matches_rejects_flags_with_compiled_pattern():
    with pytest.raises(InvalidArgument):
        from_matches(re.compile('a'), "aA", re.IGNORECASE)
    with pytest.raises(ValueError):
        from_matches(re.compile('a'), "aA", re.IGNORECASE)


def test_from_matches_zero_width_advances():
    assert [m.start() for m in from_matches(r'\b', "ab cd")] == [0, 2, 3, 5]


def test_from_matches_no_match():
    assert is_empty(from_matches('z', "abc"))


def test_from_directory(tmp_path):
    (tmp_path / 'b').mkdir()
    (tmp_path / 'b' / 'inner.txt').write_text('x')
    (tmp_path / 'a.txt').write_text('x')
    (tmp_path / 'c').mkdir()

    paths = to_list(from_directory(str(tmp_path)))

    assert paths == [os.path.join(str(tmp_path), 'a.txt'),
                     os.path.join(str(tmp_path), 'b'),
                     os.path.join(str(tmp_path), 'b', 'inner.txt'),
                     os.path.join(str(tmp_path), 'c')]


def test_from_directory_is_lazy(tmp_path):
    missing = tmp_path / 'missing'
    stream = from_directory(str(missing))
    with pytest.raises(OSError):
        is_empty(stream)
    missing.mkdir()
    assert is_empty(stream)


def test_to_stream_dispatch():
    def gen():
        yield 'g'

    stream = stream_of([1])
    assert to_stream(stream) is stream
    assert to_list(to_stream(gen)) == ['g']
    assert to_list(to_stream((1, 2))) == [1, 2]
    assert to_list(to_stream("hi")) == ['h', 'i']
    assert to_list(to_stream({3})) == [3]
    assert to_stream(EMPTY) is EMPTY


def test_to_stream_rejects_other_objects():
    with pytest.raises(TypeError):
        to_stream(42)
