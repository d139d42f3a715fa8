from dataclasses import dataclass
from enum import Enum, auto
from functools import reduce
from typing import Any, Optional
import logging
import operator

import regex

from .errors import InputError


logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NUMBER = auto()
    IDENTIFIER = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    COMMA = auto()
    BAD_TOKEN = auto()
    MACRO = auto()


@dataclass(frozen=True)
class Token:
    '''
    One lexeme.

    The tokenizer does not tell identifiers apart: variables, functions and
    operators all come out as IDENTIFIER. That is the parser's job.

    :param text: source text of the token. For a merged bad token, the
                 concatenated characters without the whitespace between them.
    :param offset: index of the first character in the source text.
    :param value: the number, for NUMBER tokens.
    :param macro: the macro that matched, for MACRO tokens.
    '''
    kind: TokenKind
    text: str
    offset: int = 0
    value: Optional[float] = None
    macro: Any = None


STRUCTURAL = {
    '(': TokenKind.OPEN_PAREN,
    ')': TokenKind.CLOSE_PAREN,
    ',': TokenKind.COMMA,
}


class Lexer:
    '''
    Tokenizer for one dialect.

    Holds no state other than the registry it matches operators and macros
    against, so one instance can lex any number of lines.
    '''
    # Number: 1, 12, 1. (notice trailing dot), 1.25
    # A second dot is never part of the number: 1.2.3 is 1.2, a bad token
    # '.', then the number 3.
    NUMBER = r'''
              [0-9]+
              (?:
                  \.
                  [0-9]*
              )?
              '''
    # Identifier: variable or function name.
    IDENTIFIER = r'''
                  [A-Za-z_]
                  [A-Za-z0-9_]*
                  '''
    SPACE = r'\s+'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.ASCII,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    NUMBER_RE = regex.compile(NUMBER, FLAGS)
    IDENTIFIER_RE = regex.compile(IDENTIFIER, FLAGS)
    SPACE_RE = regex.compile(SPACE, FLAGS)

    def __init__(self, registry):
        self.registry = registry

    def lex(self, text):
        '''
        Yield the tokens of text.

        Never fails on garbage: unrecognised characters come out as bad
        tokens, for the parser to complain about with a position.
        '''
        if not text.isascii():
            raise InputError('Input contains non ascii characters')
        offset = 0
        # Zero-length macro matches get one shot per offset.
        macros_tried = None
        # Characters of the bad token being merged, and where it started.
        bad = []
        bad_offset = None
        while offset < len(text):
            offset += skip_whitespace(text, offset)
            if offset == len(text):
                break
            token = self._next(text, offset, macros=macros_tried != offset)
            macros_tried = offset
            if token.kind is TokenKind.BAD_TOKEN:
                if not bad:
                    bad_offset = offset
                bad.append(token.text)
            else:
                if bad:
                    yield Token(TokenKind.BAD_TOKEN, ''.join(bad), bad_offset)
                    bad = []
                yield token
            offset += len(token.text)
        if bad:
            yield Token(TokenKind.BAD_TOKEN, ''.join(bad), bad_offset)

    def _next(self, text, offset, macros=True):
        '''
        Match the single token at offset, by order of priority.
        '''
        if macros and self.registry.macros:
            matched = match_macros(text[offset:], self.registry)
            if matched is not None:
                macro, length = matched
                return Token(TokenKind.MACRO, text[offset:offset + length],
                             offset, macro=macro)
        kind = STRUCTURAL.get(text[offset])
        if kind is not None:
            return Token(kind, text[offset], offset)
        length = match_number(text, offset)
        if length is not None:
            lexeme = text[offset:offset + length]
            return Token(TokenKind.NUMBER, lexeme, offset,
                         value=float(lexeme))
        length = match_operator(text, self.registry, offset)
        if length is None:
            length = match_identifier(text, offset)
        if length is not None:
            return Token(TokenKind.IDENTIFIER, text[offset:offset + length],
                         offset)
        return Token(TokenKind.BAD_TOKEN, text[offset], offset)


def tokenize(text, registry):
    '''
    Tokenize text against the operators and macros of registry.

    :raises InputError: text is not ASCII.
    '''
    tokens = list(Lexer(registry).lex(text))
    logger.debug('tokenized %r into %d tokens', text, len(tokens))
    return tokens


# Matchers below return the length of the match at pos in text, or None.
# They are public so that macros can build on them.

def match_pattern(pattern, text, pos=0):
    match = pattern.match(text, pos)
    if match is None:
        return None
    return match.end() - pos


def match_number(text, pos=0):
    return match_pattern(Lexer.NUMBER_RE, text, pos)


def match_identifier(text, pos=0):
    return match_pattern(Lexer.IDENTIFIER_RE, text, pos)


def match_str(text, expected, pos=0):
    if expected and text.startswith(expected, pos):
        return len(expected)
    return None


def skip_whitespace(text, pos=0):
    '''
    Return the number of whitespace characters at pos in text.
    '''
    return match_pattern(Lexer.SPACE_RE, text, pos) or 0


def match_operator(text, registry, pos=0):
    '''
    Match a binary operator, else a unary one; first in registry order wins.

    This is not longest match: with both ``*`` and ``**`` registered, the
    one listed first decides.
    '''
    for op in registry.binary_operators + registry.unary_operators:
        length = match_str(text, op.token, pos)
        if length is not None:
            return length
    return None


def match_macros(text, registry):
    '''
    Return (macro, length) for the first macro of registry matching text.
    '''
    for macro in registry.macros:
        length = macro.match_input(text, registry)
        if length is not None:
            return macro, length
    return None
