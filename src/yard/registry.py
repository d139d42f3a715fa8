from dataclasses import dataclass, field
from typing import List

from .defaults import (default_binary_operators, default_functions,
                       default_unary_operators)
from .macros import Macro, default_macros
from .types import BinaryOperator, Function, UnaryOperator


@dataclass
class Registry:
    '''
    A dialect: the operators, functions and macros an expression may use.

    Lists are ordered; when two entries could match the same input, the
    earlier one wins. Don't modify a registry while a call that uses it is
    running. Copy it and extend the copy instead.
    '''
    binary_operators: List[BinaryOperator] = field(default_factory=list)
    unary_operators: List[UnaryOperator] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)
    macros: List[Macro] = field(default_factory=list)

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def default(cls):
        '''
        Arithmetic operators and the default functions, no macros.
        '''
        return cls(binary_operators=default_binary_operators(),
                   unary_operators=default_unary_operators(),
                   functions=default_functions())

    @classmethod
    def default_with_macros(cls):
        registry = cls.default()
        registry.macros = default_macros()
        return registry

    def copy(self):
        return type(self)(binary_operators=list(self.binary_operators),
                          unary_operators=list(self.unary_operators),
                          functions=list(self.functions),
                          macros=list(self.macros))

    def find_binary(self, token):
        return _find(self.binary_operators, token)

    def find_unary(self, token):
        return _find(self.unary_operators, token)

    def find_function(self, token):
        return _find(self.functions, token)


def _find(items, token):
    return next((item for item in items if item.token == token), None)
