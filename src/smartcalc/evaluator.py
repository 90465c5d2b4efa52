from collections import namedtuple
import math

from .lexer import Lexer, normalize
from .parser import parse, walk
from .util import EvalError, ExpressionSyntaxError


ERROR = 'Error'


class Evaluation(namedtuple('Evaluation', 'value error')):
    '''
    Outcome of evaluating an expression: a float value, or the EvalError
    that stopped it. Exactly one of the two is set.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None

    @property
    def display(self):
        '''
        What a front end shows: the formatted number, or "Error".
        '''
        if self.ok:
            return format_number(self.value)
        return ERROR


def format_number(value):
    '''
    Format a result for display and history records.

    Integral values print without a fractional part while they are exactly
    representable (below 1e16 in magnitude); everything else, infinities
    included, uses the shortest repr that round-trips.
    '''
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def evaluate(text, lexer=None):
    '''
    Normalize, tokenize, parse and evaluate text.

    Never raises for bad input; failures come back as the Evaluation's error.
    '''
    lexer = lexer or Lexer()
    try:
        return Evaluation(walk(parse(lexer.lex(normalize(text)))), None)
    except RecursionError:
        return Evaluation(None, ExpressionSyntaxError('Expression nested '
                                                      'too deeply'))
    except EvalError as e:
        return Evaluation(None, e)
