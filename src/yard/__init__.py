'''
Extensible shunting-yard expression evaluator.

Turns infix arithmetic like ``max(a, 2) ^ 2 - 1`` into a reverse polish
instruction stream and runs it on a stack machine. Which operators, functions
and macros exist is up to the Registry the caller passes in; the default one
has the arithmetic operators, unary plus and minus, and max, sum, sub, prod.

The three stages can be used separately, to parse once and run many times:

    registry = Registry.default()
    instructions = parse(tokenize('a * 2', registry), registry)
    execute(instructions, {'a': 21.0}, registry)

Numbers are floats. Input must be ASCII.
'''

from .cli import CLI
from .errors import (EvalError, EvalErrorKind, InputError, ParseError,
                     ParseErrorKind, YardError)
from .lexer import Lexer, Token, TokenKind, tokenize
from .machine import (Machine, evaluate, evaluate_with_vars,
                      evaluate_with_vars_and_registry, execute)
from .macros import Assign, Macro, MacroParse, ParsedMacro
from .parser import Parser, parse, parse_str
from .registry import Registry
from .types import (ApplyMode, Associativity, BinaryOperator, Function,
                    ParseState, UnaryOperator)


__all__ = (
    'evaluate', 'evaluate_with_vars', 'evaluate_with_vars_and_registry',
    'tokenize', 'parse', 'parse_str', 'execute',
    'Registry', 'BinaryOperator', 'UnaryOperator', 'Function',
    'Associativity', 'ParseState', 'ApplyMode',
    'Macro', 'ParsedMacro', 'MacroParse', 'Assign',
    'Lexer', 'Token', 'TokenKind', 'Parser', 'Machine', 'CLI',
    'YardError', 'InputError', 'ParseError', 'ParseErrorKind',
    'EvalError', 'EvalErrorKind',
)
