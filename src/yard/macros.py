'''
Macros: dialect hooks that claim input before any other tokenizer rule.

A macro is matched by the tokenizer, parsed by the parser into a
ParsedMacro, and that is what the machine runs. Subclass Macro and
ParsedMacro to write your own; Assign below is the one shipped.
'''

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

from .errors import EvalError, EvalErrorKind, ParseError, ParseErrorKind
from .lexer import match_identifier, match_str, skip_whitespace
from .types import ApplyMode, ParseState


logger = logging.getLogger(__name__)


class ParsedMacro(ABC):
    '''
    One parsed occurrence of a macro, holding all it needs to run.
    '''

    @abstractmethod
    def eval(self, stack, variables, registry):
        '''
        Run against the machine's state.

        :param stack: the work stack, a list, top at the end. May be
                      modified in place.
        :param variables: the caller's variable dict. May be modified.
        '''


@dataclass
class MacroParse:
    '''
    What the parser does with a parsed macro, and the state it continues in.
    '''
    result: ParsedMacro
    mode: ApplyMode
    state_after: ParseState

    @classmethod
    def before(cls, result, state_after):
        return cls(result, ApplyMode.BEFORE, state_after)

    @classmethod
    def after(cls, result, state_after):
        return cls(result, ApplyMode.AFTER, state_after)


class Macro(ABC):

    @abstractmethod
    def match_input(self, text, registry):
        '''
        Return the length of this macro's match at the start of text, or None.

        A zero length match is allowed and alters the meaning of whatever
        token follows.
        '''

    @abstractmethod
    def parse(self, text, registry, state):
        '''
        Parse exactly the text match_input matched.

        :param state: the parser's current ParseState.
        :return: MacroParse.
        :raises ParseError: the macro can't appear here. The parser supplies
                            the position.
        '''

    def __repr__(self):
        return type(self).__name__ + '()'


class Assign(Macro):
    '''
    ``name = expression``: bind the value of expression to name.

    The assignment is transparent: its value is the value of expression, so
    ``1 + (a = 2)`` is 3.
    '''

    def match_input(self, text, registry):
        length = match_identifier(text)
        if length is None:
            return None
        length += skip_whitespace(text, length)
        equals = match_str(text, '=', length)
        if equals is None:
            return None
        length += equals
        # Leave == to dialects that register it as an operator.
        if text.startswith('=', length):
            return None
        return length

    def parse(self, text, registry, state):
        if state is not ParseState.EXPECT_EXPRESSION:
            raise ParseError(ParseErrorKind.EXPECTED_EXPRESSION)
        name = text[:match_identifier(text)]
        return MacroParse.after(AssignParsed(name),
                                ParseState.EXPECT_EXPRESSION)


@dataclass(frozen=True)
class AssignParsed(ParsedMacro):
    name: str

    def eval(self, stack, variables, registry):
        if not stack:
            raise EvalError(EvalErrorKind.EMPTY_EVAL_STACK)
        logger.debug('assigning %s = %r', self.name, stack[-1])
        variables[self.name] = stack[-1]


def default_macros():
    return [Assign()]
