'''
Macro tests: the shipped assignment macro, and a dialect defined one
'''

import math
from dataclasses import dataclass

from yard.errors import EvalError, EvalErrorKind, ParseError, ParseErrorKind
from yard.instructions import ExecuteMacro, PushNumber
from yard.lexer import match_str
from yard.machine import evaluate_with_vars_and_registry, execute
from yard.macros import (Assign, AssignParsed, Macro, MacroParse,
                         ParsedMacro)
from yard.parser import parse_str
from yard.registry import Registry
from yard.types import ApplyMode, ParseState

from pytest import mark, raises


@mark.parametrize('text, length', [
    ('a = 10', 3),
    ('a = b', 3),
    ('a =', 3),
    ('abc=1', 4),
    ('_x\t=  2', 4),
    ('10 = 1', None),
    ('a == b', None),
    ('a + 1', None),
    ('= 1', None),
])
def test_assign_match(text, length, registry):
    assert Assign().match_input(text, registry) == length


def test_assign_parse(registry):
    parsed = Assign().parse('abc =', registry, ParseState.EXPECT_EXPRESSION)
    assert parsed == MacroParse(AssignParsed('abc'), ApplyMode.AFTER,
                                ParseState.EXPECT_EXPRESSION)


def test_assign_parse_after_expression(registry):
    with raises(ParseError) as excinfo:
        Assign().parse('a =', registry, ParseState.EXPECT_OPERATOR)
    assert excinfo.value.kind is ParseErrorKind.EXPECTED_EXPRESSION
    assert excinfo.value.pos is None


def test_assign_position_filled_in(macro_registry):
    with raises(ParseError) as excinfo:
        parse_str('1 a = 2', macro_registry)
    assert excinfo.value.kind is ParseErrorKind.EXPECTED_EXPRESSION
    assert excinfo.value.pos == 1


def test_assign_runs_after_its_expression(macro_registry):
    instructions = parse_str('a = 10', macro_registry)
    assert instructions == [PushNumber(10.0), ExecuteMacro(AssignParsed('a'))]


@mark.parametrize('text, result, assigned', [
    ('a = 10', 10.0, {'a': 10.0}),
    ('a = 22.0 + 20.0', 42.0, {'a': 42.0}),
    ('a = b = 3', 3.0, {'a': 3.0, 'b': 3.0}),
    ('1 + (a = 2)', 3.0, {'a': 2.0}),
    ('1 + a = 2', 3.0, {'a': 2.0}),
    ('max(a = 1, 5)', 5.0, {'a': 1.0}),
])
def test_assign(text, result, assigned, macro_registry):
    variables = {}
    assert evaluate_with_vars_and_registry(text, variables,
                                           macro_registry) == result
    assert variables == assigned


def test_assign_then_read(macro_registry):
    variables = {}
    evaluate_with_vars_and_registry('x = 4', variables, macro_registry)
    assert evaluate_with_vars_and_registry('x * x', variables,
                                           macro_registry) == 16.0


def test_assign_without_value(macro_registry):
    with raises(EvalError) as excinfo:
        AssignParsed('a').eval([], {}, macro_registry)
    assert excinfo.value.kind is EvalErrorKind.EMPTY_EVAL_STACK


def test_assign_without_expression(macro_registry):
    with raises(ParseError) as excinfo:
        parse_str('a =', macro_registry)
    assert excinfo.value.kind is ParseErrorKind.OPERATOR_AT_END


class PushPi(ParsedMacro):

    def eval(self, stack, variables, registry):
        stack.append(math.pi)


class Pi(Macro):
    '''
    Constant spelt ``#pi``, pushed as soon as it is seen.
    '''

    def match_input(self, text, registry):
        return match_str(text, '#pi')

    def parse(self, text, registry, state):
        if state is not ParseState.EXPECT_EXPRESSION:
            raise ParseError(ParseErrorKind.EXPECTED_OPERATOR)
        return MacroParse.before(PushPi(), ParseState.EXPECT_OPERATOR)


def pi_registry():
    registry = Registry.default_with_macros()
    registry.macros.append(Pi())
    return registry


def test_before_macro():
    assert evaluate_with_vars_and_registry('2 * #pi', {},
                                           pi_registry()) == 2 * math.pi
    assert evaluate_with_vars_and_registry('r = #pi', {'r': 0.0},
                                           pi_registry()) == math.pi


def test_before_macro_misplaced():
    with raises(ParseError) as excinfo:
        parse_str('2 #pi', pi_registry())
    assert excinfo.value.kind is ParseErrorKind.EXPECTED_OPERATOR
    assert excinfo.value.pos == 1


def test_macros_copy():
    registry = pi_registry()
    copy = registry.copy()
    copy.macros.pop()
    assert len(registry.macros) == 2


@dataclass(frozen=True)
class Broken(ParsedMacro):

    def eval(self, stack, variables, registry):
        raise KeyError('missing')


def test_macro_failure_wrapped():
    with raises(EvalError) as excinfo:
        execute([PushNumber(1.0), ExecuteMacro(Broken())])
    assert excinfo.value.kind is EvalErrorKind.CALLBACK_FAILED
    assert str(excinfo.value) == 'Broken() failed'
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_macro_eval_error_passes_through():
    with raises(EvalError) as excinfo:
        execute([ExecuteMacro(AssignParsed('a'))])
    assert excinfo.value.kind is EvalErrorKind.EMPTY_EVAL_STACK
