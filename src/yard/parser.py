'''
Shunting-yard parser: tokens in, reverse polish instructions out.

Identifiers are sorted into variables, functions and operators here, using
the registry.
'''

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any
import logging

from .errors import ParseError, ParseErrorKind
from .instructions import (ApplyBinary, ApplyUnary, CallFunction, ExecuteMacro,
                           PushNumber, PushVariable)
from .lexer import TokenKind, tokenize
from .types import ApplyMode, Associativity, ParseState


logger = logging.getLogger(__name__)


class Pending(Enum):
    PAREN = auto()
    UNARY = auto()
    BINARY = auto()
    FUNCTION = auto()
    MACRO = auto()


@dataclass
class StackEntry:
    '''
    Operator stack entry.

    :param pos: index of the token that pushed it, for errors.
    :param arity: arguments seen so far, for function calls.
    '''
    kind: Pending
    pos: int
    item: Any = None
    arity: int = 0


class Parser:
    '''
    Parser for one dialect.

    For consistency with Lexer, holds the registry and nothing else between
    calls to parse.
    '''

    def __init__(self, registry):
        self.registry = registry

    def parse(self, tokens):
        '''
        Parse tokens into a list of instructions.

        An empty token list is an empty program, which the machine rejects.

        :raises ParseError: on the first error found.
        '''
        tokens = list(tokens)
        self.tokens = tokens
        self.queue = []
        self.stack = []
        self.state = ParseState.EXPECT_EXPRESSION
        for pos, token in enumerate(tokens):
            type(self).HANDLERS[token.kind](self, pos, token)
        if tokens and self.state is ParseState.EXPECT_EXPRESSION:
            raise ParseError(ParseErrorKind.OPERATOR_AT_END, len(tokens) - 1)
        while self.stack:
            entry = self.stack.pop()
            if entry.kind is Pending.PAREN:
                raise ParseError(ParseErrorKind.MISMATCHED_LEFT_PAREN,
                                 entry.pos)
            self._emit(entry)
        logger.debug('parsed %d tokens into %d instructions',
                     len(tokens), len(self.queue))
        return self.queue

    def _expect(self, state, kind, pos):
        if self.state is not state:
            raise ParseError(kind, pos)

    def _push(self, kind, pos, item=None):
        self.stack.append(StackEntry(kind, pos, item))

    def _emit(self, entry):
        '''
        Move a popped operator stack entry to the output queue.
        '''
        if entry.kind is Pending.UNARY:
            instruction = ApplyUnary(entry.item)
        elif entry.kind is Pending.BINARY:
            instruction = ApplyBinary(entry.item)
        elif entry.kind is Pending.FUNCTION:
            function = entry.item
            if not function.accepts(entry.arity):
                raise ParseError(ParseErrorKind.ARITY_MISMATCH, entry.pos,
                                 name=function.token,
                                 expected=function.arity,
                                 actual=entry.arity)
            instruction = CallFunction(function, entry.arity)
        elif entry.kind is Pending.MACRO:
            instruction = ExecuteMacro(entry.item)
        else:
            raise AssertionError('paren cannot be emitted')
        self.queue.append(instruction)

    def _unwind(self):
        '''
        Emit everything above the innermost open paren.

        Return False if there is no open paren.
        '''
        while self.stack and self.stack[-1].kind is not Pending.PAREN:
            self._emit(self.stack.pop())
        return bool(self.stack)

    def _number(self, pos, token):
        self._expect(ParseState.EXPECT_EXPRESSION,
                     ParseErrorKind.EXPECTED_OPERATOR, pos)
        self.queue.append(PushNumber(token.value))
        self.state = ParseState.EXPECT_OPERATOR

    def _identifier(self, pos, token):
        name = token.text
        if self.state is ParseState.EXPECT_OPERATOR:
            return self._binary(pos, name)
        unary = self.registry.find_unary(name)
        if unary is not None:
            return self._push(Pending.UNARY, pos, unary)
        function = self.registry.find_function(name)
        if function is not None:
            following = self.tokens[pos + 1:pos + 2]
            if not following or following[0].kind is not TokenKind.OPEN_PAREN:
                raise ParseError(
                    ParseErrorKind.NO_LEFT_PAREN_AFTER_FUNCTION_ID, pos)
            return self._push(Pending.FUNCTION, pos, function)
        if self.registry.find_binary(name) is not None:
            raise ParseError(ParseErrorKind.EXPECTED_EXPRESSION, pos)
        self.queue.append(PushVariable(name))
        self.state = ParseState.EXPECT_OPERATOR

    def _binary(self, pos, name):
        incoming = self.registry.find_binary(name)
        if incoming is None:
            raise ParseError(ParseErrorKind.EXPECTED_OPERATOR, pos)
        while self.stack:
            top = self.stack[-1]
            # Unary operators bind tighter than any binary one.
            if top.kind is Pending.UNARY:
                self._emit(self.stack.pop())
            elif top.kind is Pending.BINARY and (
                    top.item.precedence > incoming.precedence or
                    top.item.precedence == incoming.precedence and
                    top.item.associativity is Associativity.LEFT):
                self._emit(self.stack.pop())
            else:
                break
        self._push(Pending.BINARY, pos, incoming)
        self.state = ParseState.EXPECT_EXPRESSION

    def _open_paren(self, pos, token):
        self._expect(ParseState.EXPECT_EXPRESSION,
                     ParseErrorKind.EXPECTED_OPERATOR, pos)
        self._push(Pending.PAREN, pos)

    def _close_paren(self, pos, token):
        if self.state is ParseState.EXPECT_EXPRESSION:
            return self._close_empty(pos)
        if not self._unwind():
            raise ParseError(ParseErrorKind.MISMATCHED_RIGHT_PAREN, pos)
        self.stack.pop()
        if self.stack and self.stack[-1].kind is Pending.FUNCTION:
            function = self.stack.pop()
            # The last argument, ended by this paren.
            function.arity += 1
            self._emit(function)
        self.state = ParseState.EXPECT_OPERATOR

    def _close_empty(self, pos):
        '''
        Close paren where an expression was expected: f() or an error.
        '''
        if pos == 0 or self.tokens[pos - 1].kind is not TokenKind.OPEN_PAREN:
            if any(entry.kind is Pending.PAREN for entry in self.stack):
                raise ParseError(ParseErrorKind.OPERATOR_AT_END, pos)
            raise ParseError(ParseErrorKind.MISMATCHED_RIGHT_PAREN, pos)
        self.stack.pop()
        if not self.stack or self.stack[-1].kind is not Pending.FUNCTION:
            raise ParseError(ParseErrorKind.EMPTY_PARENS_NOT_FUNCTION_CALL,
                             pos)
        self._emit(self.stack.pop())
        self.state = ParseState.EXPECT_OPERATOR

    def _comma(self, pos, token):
        self._expect(ParseState.EXPECT_OPERATOR,
                     ParseErrorKind.EXPECTED_EXPRESSION, pos)
        if not self._unwind() or len(self.stack) < 2 or \
           self.stack[-2].kind is not Pending.FUNCTION:
            raise ParseError(ParseErrorKind.COMMA_OUTSIDE_FUNCTION, pos)
        self.stack[-2].arity += 1
        self.state = ParseState.EXPECT_EXPRESSION

    def _macro(self, pos, token):
        try:
            parsed = token.macro.parse(token.text, self.registry, self.state)
        except ParseError as e:
            if e.pos is None:
                e.pos = pos
            raise
        if parsed.mode is ApplyMode.BEFORE:
            self.queue.append(ExecuteMacro(parsed.result))
        else:
            self._push(Pending.MACRO, pos, parsed.result)
        self.state = parsed.state_after

    def _bad_token(self, pos, token):
        raise ParseError(ParseErrorKind.BAD_TOKEN, pos, text=token.text)

    HANDLERS = {
        TokenKind.NUMBER: _number,
        TokenKind.IDENTIFIER: _identifier,
        TokenKind.OPEN_PAREN: _open_paren,
        TokenKind.CLOSE_PAREN: _close_paren,
        TokenKind.COMMA: _comma,
        TokenKind.MACRO: _macro,
        TokenKind.BAD_TOKEN: _bad_token,
    }


def parse(tokens, registry):
    return Parser(registry).parse(tokens)


def parse_str(text, registry):
    '''
    Tokenize and parse text.
    '''
    return parse(tokenize(text, registry), registry)
