from enum import Enum
from functools import wraps


class YardError(Exception):
    pass


class InputError(YardError, ValueError):
    '''
    Input the tokenizer refuses to look at, e.g. non-ASCII text.
    '''


class ParseErrorKind(Enum):
    '''
    What went wrong while parsing. Values are message templates.
    '''
    NO_LEFT_PAREN_AFTER_FUNCTION_ID = 'Expected left paren after function id'
    BAD_TOKEN = 'Bad token {text!r}'
    OPERATOR_AT_END = 'Operator at the end of the token stream'
    MISMATCHED_LEFT_PAREN = 'Mismatched left paren in the token stream'
    MISMATCHED_RIGHT_PAREN = 'Mismatched right paren in the token stream'
    ARITY_MISMATCH = ('Arity of function {name} mismatched: '
                      'expected: {expected}, actual: {actual}')
    EXPECTED_OPERATOR = 'Expected operator, found expression'
    EXPECTED_EXPRESSION = 'Expected expression, found operator'
    COMMA_OUTSIDE_FUNCTION = 'Comma can only be used in function calls'
    EMPTY_PARENS_NOT_FUNCTION_CALL = ('Found empty parens that are not part '
                                      'of a function call')


class EvalErrorKind(Enum):
    '''
    What went wrong while running an instruction stream.
    '''
    VARIABLE_NOT_FOUND = 'Variable not found: {name}'
    EMPTY_EVAL_STACK = 'Eval stack is empty during processing'
    ARITY_MISMATCH = ('Arity of function {name} mismatched during '
                      'evaluation: expected: {expected}, actual: {actual}')
    ILL_FORMED_TOKEN_STREAM = 'Ill formed token stream'
    CALLBACK_FAILED = '{name} failed'


class _KindError(YardError):
    '''
    Error carrying a kind and the details its message template refers to.
    '''

    def __init__(self, kind, *, text=None, name=None, expected=None,
                 actual=None):
        self.kind = kind
        self.text = text
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(kind.value.format(text=text,
                                           name=name,
                                           expected=expected,
                                           actual=actual))

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self):
        return (self.kind, self.text, self.name, self.expected, self.actual)


class ParseError(_KindError):
    '''
    Parser error, tagged with the index of the offending token.

    ``pos`` may be None while the error travels out of a macro; the parser
    fills it in with the macro token's position.
    '''

    def __init__(self, kind, pos=None, **details):
        super().__init__(kind, **details)
        self.pos = pos

    def _key(self):
        return super()._key() + (self.pos,)

    def __repr__(self):
        return '{}({}, pos={})'.format(type(self).__name__,
                                       self.kind.name,
                                       self.pos)

    def report(self, tokens):
        '''
        Render the token stream with the offending token underlined.

        Three lines: the token texts joined by single spaces, carets under the
        token at ``pos``, and the message.
        '''
        texts = [token.text for token in tokens]
        offset = width = 0
        if self.pos is not None and self.pos < len(texts):
            offset = sum(len(text) + 1 for text in texts[:self.pos])
            width = max(len(texts[self.pos]), 1)
        return '\n'.join([' '.join(texts),
                          ' ' * offset + '^' * width,
                          str(self)])


class EvalError(_KindError):

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.kind.name)


def wrap_user_errors(fmt):
    '''
    Decorator that converts exceptions from dialect callbacks to EvalErrors.

    Passes through YardErrors. The callback's name for the message is
    ``fmt`` formatted with the wrapped function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except YardError:
                raise
            except Exception as e:
                raise EvalError(EvalErrorKind.CALLBACK_FAILED,
                                name=fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
