'''
The default dialect: arithmetic operators and a handful of functions.

Arithmetic follows IEEE 754 doubles, so dividing by zero or overflowing a
power yields inf or nan instead of raising like Python's float operators do.
'''

import math
import operator

from .types import Associativity, BinaryOperator, Function, UnaryOperator


def divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _is_odd_integer(n):
    return n.is_integer() and n % 2 == 1


def power(base, exponent):
    '''
    Real power, inf or nan where math.pow would raise.
    '''
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 to a negative power, or a negative base to a fractional one.
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def maximum(args):
    left, right = args
    # NaN loses against any number.
    if math.isnan(left):
        return right
    if math.isnan(right):
        return left
    return max(left, right)


PLUS = BinaryOperator('+', 1, Associativity.LEFT, operator.__add__)
MINUS = BinaryOperator('-', 1, Associativity.LEFT, operator.__sub__)
MULTIPLY = BinaryOperator('*', 2, Associativity.LEFT, operator.__mul__)
DIVIDE = BinaryOperator('/', 2, Associativity.LEFT, divide)
POWER = BinaryOperator('^', 3, Associativity.RIGHT, power)

UNARY_PLUS = UnaryOperator('+', operator.__pos__)
NEGATE = UnaryOperator('-', operator.__neg__)

FN_MAX = Function('max', 2, maximum)
FN_SUM = Function('sum', None, lambda args: sum(args, 0.0))
FN_SUB = Function('sub', 2, lambda args: args[0] - args[1])
FN_PROD = Function('prod', None, lambda args: float(math.prod(args)))


def default_binary_operators():
    return [PLUS, MINUS, MULTIPLY, DIVIDE, POWER]


def default_unary_operators():
    return [UNARY_PLUS, NEGATE]


def default_functions():
    return [FN_MAX, FN_SUM, FN_SUB, FN_PROD]
