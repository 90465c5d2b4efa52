'''
Calculator core.

An editable expression buffer with a cursor, an infix arithmetic evaluator
with the usual precedence (+ - below * /, unary minus above both,
parentheses overriding), and two bounded, deduplicated, persisted lists:
the history of successful evaluations and the user's saved formulas.

Presentation is somebody else's job; cli.CLI is a terminal front end.
'''

from .buffer import ExpressionState
from .evaluator import Evaluation, evaluate, format_number
from .gateway import JSONFileGateway, MemoryGateway
from .lexer import Lexer
from .session import Calculator
from .store import BoundedRecordStore, HistoryStore, SavedFormulaStore
from .util import (CalcError, DivisionByZero, EvalError,
                   ExpressionSyntaxError, PersistenceError)


__all__ = ('Calculator', 'ExpressionState', 'Evaluation', 'evaluate',
           'format_number', 'Lexer', 'BoundedRecordStore', 'HistoryStore',
           'SavedFormulaStore', 'MemoryGateway', 'JSONFileGateway',
           'CalcError', 'EvalError', 'ExpressionSyntaxError',
           'DivisionByZero', 'PersistenceError')
