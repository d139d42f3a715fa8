from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Sequence

from .errors import EvalError, EvalErrorKind


class Associativity(Enum):
    LEFT = auto()
    # The only default operator that is right associative is power.
    RIGHT = auto()


class ParseState(Enum):
    '''
    What the parser expects to see next.
    '''
    EXPECT_EXPRESSION = auto()
    EXPECT_OPERATOR = auto()


class ApplyMode(Enum):
    '''
    Where a parsed macro goes relative to the tokens around it.

    BEFORE puts it straight into the output queue, so ``.m 120`` runs as
    ``.m 120``. AFTER puts it on the operator stack, so whatever is parsed
    afterwards runs first: ``120 .m``.
    '''
    BEFORE = auto()
    AFTER = auto()


@dataclass(frozen=True)
class BinaryOperator:
    '''
    Infix operator.

    :param token: text of the operator, matched by exact prefix.
    :param precedence: higher binds tighter.
    :param associativity: tie breaker for equal precedence.
    :param func: called by the machine with (left, right).
    '''
    token: str
    precedence: int
    associativity: Associativity
    func: Callable[[float, float], float]

    def __repr__(self):
        return 'BinaryOperator({!r})'.format(self.token)


@dataclass(frozen=True)
class UnaryOperator:
    '''
    Prefix operator. Binds tighter than any binary operator.
    '''
    token: str
    func: Callable[[float], float]

    def __repr__(self):
        return 'UnaryOperator({!r})'.format(self.token)


@dataclass(frozen=True)
class Function:
    '''
    Named callable.

    :param arity: number of arguments, or None for variadic. Variadic
                  functions may be called with no arguments at all.
    :param func: called with a list of the argument values, left to right.
    '''
    token: str
    arity: Optional[int]
    func: Callable[[Sequence[float]], float]

    @property
    def variadic(self):
        return self.arity is None

    def accepts(self, count):
        return self.variadic or self.arity == count

    def call(self, args):
        '''
        Call with args, refusing a number of them other than the arity.
        '''
        if not self.accepts(len(args)):
            raise EvalError(EvalErrorKind.ARITY_MISMATCH,
                            name=self.token,
                            expected=self.arity,
                            actual=len(args))
        return self.func(args)

    def __repr__(self):
        arity = '...' if self.variadic else self.arity
        return 'Function({!r}/{})'.format(self.token, arity)
