class StreamError(Exception):
    """Base class of all errors raised by the stream core"""


class InvalidProducer(StreamError, TypeError):
    def __init__(self, value):
        self.value = value
        super().__init__("producer returned {!r}; expected a (head, tail) pair or None".format(value))


class Immutable(StreamError, TypeError):
    pass


class InvalidArgument(StreamError, ValueError):
    pass


class ReentrantForce(StreamError, RuntimeError):
    def __init__(self, stream):
        self.stream = stream
        super().__init__("stream forced itself while being forced")
