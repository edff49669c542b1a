import operator

import sympy as sy

from api import from_range
from core import element_at, to_list
from stream import drop, iterate, scan, stream_map, take


def derivatives(expr, var):
    """expr, d expr/d var, d^2 expr/d var^2, ..."""
    return iterate(lambda e: sy.diff(e, var), expr)


def taylor_terms(expr, var, point=0):
    """terms of the Taylor series of expr around point"""

    def term(n, derivative):
        return derivative.subs(var, point) / sy.factorial(n) * (var - point) ** n

    return stream_map(term, from_range(0), derivatives(expr, var))


def partial_sums(terms):
    return drop(1, scan(operator.add, sy.Integer(0), terms))


def approximate(expr, var, value, n_terms, point=0):
    return element_at(partial_sums(taylor_terms(expr, var, point)), n_terms - 1).subs(var, value)


if __name__ == "__main__":
    x = sy.Symbol('x')

    for expr in (sy.exp(x), sy.sin(x), sy.cos(x), sy.log(1 + x)):
        print('{} = {} + ...'.format(expr, ' + '.join(str(t) for t in to_list(take(6, taylor_terms(expr, x))))))

    e = approximate(sy.exp(x), x, 1, 15)
    print('e ~ {} = {}'.format(e, sy.N(e)))
