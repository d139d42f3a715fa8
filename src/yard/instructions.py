'''
Reverse polish instructions, as produced by the parser and run by the machine.

Operators and functions are held by reference, so a stream runs without the
tokens or registry it was parsed from.
'''

from dataclasses import dataclass

from .macros import ParsedMacro
from .types import BinaryOperator, Function, UnaryOperator


@dataclass(frozen=True)
class PushNumber:
    value: float


@dataclass(frozen=True)
class PushVariable:
    name: str


@dataclass(frozen=True)
class ApplyUnary:
    operator: UnaryOperator


@dataclass(frozen=True)
class ApplyBinary:
    operator: BinaryOperator


@dataclass(frozen=True)
class CallFunction:
    '''
    Call function on the top ``arity`` values of the stack.
    '''
    function: Function
    arity: int


@dataclass(frozen=True)
class ExecuteMacro:
    parsed: ParsedMacro
