from api import from_range
from core import make_deferred, to_list
from stream import stream_filter, take, take_while


def sieve(numbers):
    """sieve of Eratosthenes over a stream of increasing integers starting at a prime"""

    def thunk():
        if numbers.is_empty():
            return None
        p = numbers.first()
        return p, sieve(stream_filter(lambda n: n % p != 0, numbers.rest()))

    return make_deferred(thunk)


def primes():
    return sieve(from_range(2))


def primes_below(n):
    return take_while(lambda p: p < n, primes())


if __name__ == "__main__":
    print(to_list(take(20, primes())))
    print(to_list(primes_below(100)))
