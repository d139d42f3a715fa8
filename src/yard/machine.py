'''
Stack machine running reverse polish instruction streams, and the string
level evaluate functions built on it.

The registry is only needed here for macros, which may look at it. For most
streams the default one is as good as any.
'''

import logging

from .errors import EvalError, EvalErrorKind, wrap_user_errors
from .instructions import (ApplyBinary, ApplyUnary, CallFunction, ExecuteMacro,
                           PushNumber, PushVariable)
from .parser import parse
from .lexer import tokenize
from .registry import Registry


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Takes instructions and runs them. Variables are read, and written by
    macros, in the dict passed in, which stays the caller's.
    '''

    def __init__(self, variables=None, registry=None):
        '''
        Create empty stack machine.

        :param variables: name to value mapping, shared with the caller.
        :param registry: dialect handed to macros.
        '''
        self.variables = {} if variables is None else variables
        self.registry = Registry.default() if registry is None else registry
        self.stack = []

    def run(self, instructions):
        '''
        Run instructions on an empty stack, return the single value left.
        '''
        self.stack = []
        for instruction in instructions:
            self.step(instruction)
        if len(self.stack) != 1:
            raise EvalError(EvalErrorKind.ILL_FORMED_TOKEN_STREAM)
        return self.stack[0]

    def step(self, instruction):
        if isinstance(instruction, PushNumber):
            self._pshstack(instruction.value)
        elif isinstance(instruction, PushVariable):
            self.load(instruction.name)
        elif isinstance(instruction, ApplyUnary):
            operand, = self._popstack()
            self._pshstack(self._apply(instruction.operator, operand))
        elif isinstance(instruction, ApplyBinary):
            # Right comes off first. If you don't reverse, 9 2 - is -7.
            right, left = self._popstack(2)
            self._pshstack(self._apply(instruction.operator, left, right))
        elif isinstance(instruction, CallFunction):
            self.call(instruction.function, instruction.arity)
        elif isinstance(instruction, ExecuteMacro):
            self._expand(instruction.parsed)
        else:
            raise TypeError('Not an instruction: {!r}'.format(instruction))

    def load(self, name):
        try:
            value = self.variables[name]
        except KeyError:
            raise EvalError(EvalErrorKind.VARIABLE_NOT_FOUND,
                            name=name) from None
        self._pshstack(value)

    def call(self, function, arity):
        '''
        Call function on the top arity values, leftmost argument deepest.
        '''
        # Parsed streams never get this wrong; hand built ones might.
        if not function.accepts(arity):
            raise EvalError(EvalErrorKind.ARITY_MISMATCH,
                            name=function.token,
                            expected=function.arity,
                            actual=arity)
        if len(self.stack) < arity:
            raise EvalError(EvalErrorKind.EMPTY_EVAL_STACK)
        args = self.stack[len(self.stack) - arity:]
        result = self._call(function, args)
        del self.stack[len(self.stack) - arity:]
        self._pshstack(result)

    @wrap_user_errors('{1.token}')
    def _apply(self, operator, *operands):
        return operator.func(*operands)

    @wrap_user_errors('{1.token}')
    def _call(self, function, args):
        return function.call(args)

    @wrap_user_errors('{1!r}')
    def _expand(self, parsed):
        parsed.eval(self.stack, self.variables, self.registry)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of values from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise EvalError(EvalErrorKind.EMPTY_EVAL_STACK)
        return [self.stack.pop() for _ in range(n)]


def execute(instructions, variables=None, registry=None):
    '''
    Run a parsed instruction stream.

    Streams can be kept and run again with other variables.
    '''
    return Machine(variables, registry).run(instructions)


def evaluate(text):
    '''
    Evaluate text with the default registry and no variables.

    >>> evaluate('10 + 10 * 10')
    110.0
    '''
    return evaluate_with_vars_and_registry(text, {}, Registry.default())


def evaluate_with_vars(text, variables):
    '''
    Evaluate text with the default registry, reading variables.
    '''
    return evaluate_with_vars_and_registry(text, variables, Registry.default())


def evaluate_with_vars_and_registry(text, variables, registry):
    '''
    Evaluate text in the dialect of registry.

    Macros of the registry may modify variables.

    :raises InputError: text is not ASCII.
    :raises ParseError: text does not parse.
    :raises EvalError: text parsed but could not be evaluated.
    '''
    instructions = parse(tokenize(text, registry), registry)
    return execute(instructions, variables, registry)
