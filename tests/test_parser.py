'''
Shunting-yard parser tests
'''

from yard.defaults import (FN_MAX, FN_SUB, FN_SUM, MINUS, MULTIPLY, NEGATE,
                           PLUS, POWER)
from yard.errors import ParseError, ParseErrorKind
from yard.instructions import (ApplyBinary, ApplyUnary, CallFunction,
                               PushNumber, PushVariable)
from yard.lexer import tokenize
from yard.parser import parse, parse_str

from pytest import mark, raises


def test_precedence(registry):
    assert parse_str('1 + 2 * 3', registry) == [
        PushNumber(1.0), PushNumber(2.0), PushNumber(3.0),
        ApplyBinary(MULTIPLY), ApplyBinary(PLUS),
    ]


def test_left_associative(registry):
    assert parse_str('a - b - c', registry) == [
        PushVariable('a'), PushVariable('b'), ApplyBinary(MINUS),
        PushVariable('c'), ApplyBinary(MINUS),
    ]


def test_right_associative(registry):
    assert parse_str('2 ^ 3 ^ 2', registry) == [
        PushNumber(2.0), PushNumber(3.0), PushNumber(2.0),
        ApplyBinary(POWER), ApplyBinary(POWER),
    ]


def test_parens(registry):
    assert parse_str('(1 + 2) * 3', registry) == [
        PushNumber(1.0), PushNumber(2.0), ApplyBinary(PLUS),
        PushNumber(3.0), ApplyBinary(MULTIPLY),
    ]


def test_unary(registry):
    assert parse_str('-1', registry) == [PushNumber(1.0), ApplyUnary(NEGATE)]
    assert parse_str('--x', registry) == [
        PushVariable('x'), ApplyUnary(NEGATE), ApplyUnary(NEGATE),
    ]


def test_unary_binds_tighter_than_binary(registry):
    assert parse_str('-2 ^ 2', registry) == [
        PushNumber(2.0), ApplyUnary(NEGATE), PushNumber(2.0),
        ApplyBinary(POWER),
    ]


def test_function_calls(registry):
    assert parse_str('max(1, 2)', registry) == [
        PushNumber(1.0), PushNumber(2.0), CallFunction(FN_MAX, 2),
    ]
    assert parse_str('sum()', registry) == [CallFunction(FN_SUM, 0)]


def test_nested_function_arity(registry):
    assert parse_str('sum(1, sum(2, 3), 4)', registry) == [
        PushNumber(1.0), PushNumber(2.0), PushNumber(3.0),
        CallFunction(FN_SUM, 2), PushNumber(4.0), CallFunction(FN_SUM, 3),
    ]


def test_function_argument_expressions(registry):
    assert parse_str('sub(1 + 2, (3))', registry) == [
        PushNumber(1.0), PushNumber(2.0), ApplyBinary(PLUS),
        PushNumber(3.0), CallFunction(FN_SUB, 2),
    ]


def test_empty(registry):
    assert parse([], registry) == []


@mark.parametrize('text, kind, pos', [
    ('sum + 10', ParseErrorKind.NO_LEFT_PAREN_AFTER_FUNCTION_ID, 0),
    ('1 + max', ParseErrorKind.NO_LEFT_PAREN_AFTER_FUNCTION_ID, 2),
    ('sum(10 + )', ParseErrorKind.OPERATOR_AT_END, 4),
    ('1 + ', ParseErrorKind.OPERATOR_AT_END, 1),
    ('-', ParseErrorKind.OPERATOR_AT_END, 0),
    ('(1 + 1))', ParseErrorKind.MISMATCHED_RIGHT_PAREN, 5),
    (')', ParseErrorKind.MISMATCHED_RIGHT_PAREN, 0),
    ('((1 + 1)', ParseErrorKind.MISMATCHED_LEFT_PAREN, 0),
    ('max(1, 2', ParseErrorKind.MISMATCHED_LEFT_PAREN, 1),
    ('1 1', ParseErrorKind.EXPECTED_OPERATOR, 1),
    ('1 (2)', ParseErrorKind.EXPECTED_OPERATOR, 1),
    ('x y', ParseErrorKind.EXPECTED_OPERATOR, 1),
    ('1 + * 2', ParseErrorKind.EXPECTED_EXPRESSION, 2),
    ('max(, 1)', ParseErrorKind.EXPECTED_EXPRESSION, 2),
    ('1, 2', ParseErrorKind.COMMA_OUTSIDE_FUNCTION, 1),
    ('(1, 2)', ParseErrorKind.COMMA_OUTSIDE_FUNCTION, 2),
    ('()', ParseErrorKind.EMPTY_PARENS_NOT_FUNCTION_CALL, 1),
    ('1 + ()', ParseErrorKind.EMPTY_PARENS_NOT_FUNCTION_CALL, 3),
])
def test_errors(text, kind, pos, registry):
    with raises(ParseError) as excinfo:
        parse_str(text, registry)
    assert excinfo.value.kind is kind
    assert excinfo.value.pos == pos


def test_bad_token(registry):
    with raises(ParseError) as excinfo:
        parse_str('1 # 2', registry)
    assert excinfo.value == ParseError(ParseErrorKind.BAD_TOKEN, 1, text='#')


@mark.parametrize('text, expected, actual', [
    ('sub(1)', 2, 1),
    ('max(1, 2, 3)', 2, 3),
    ('max()', 2, 0),
])
def test_arity(text, expected, actual, registry):
    function = text[:text.index('(')]
    with raises(ParseError) as excinfo:
        parse_str(text, registry)
    assert excinfo.value == ParseError(ParseErrorKind.ARITY_MISMATCH, 0,
                                       name=function,
                                       expected=expected,
                                       actual=actual)


def test_binary_only_dialect(binary_registry):
    with raises(ParseError) as excinfo:
        parse_str('+ 1', binary_registry)
    assert excinfo.value.kind is ParseErrorKind.EXPECTED_EXPRESSION
    assert excinfo.value.pos == 0


def test_registry_untouched(registry):
    before = registry.copy()
    tokens = tokenize('max(a, 2) ^ -sum(1, 2, 3)', registry)
    parse(tokens, registry)
    assert registry == before


def test_reparse_same_tokens(registry):
    tokens = tokenize('sum(1, 2) * x', registry)
    assert parse(tokens, registry) == parse(tokens, registry)
