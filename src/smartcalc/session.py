import logging

from . import buffer
from .evaluator import evaluate
from .lexer import Lexer
from .store import HistoryStore, SavedFormulaStore


logger = logging.getLogger(__name__)


class Calculator:
    '''
    One calculator session: the expression buffer, the last result, and the
    history and saved formula stores.

    Front ends call the operations below and re-read ``state``, ``result``,
    ``history`` and ``saved_formulas`` afterwards, or subscribe to be called
    back after every change. Operations that touch a store are coroutines.
    '''

    def __init__(self, gateway, capacity=None):
        '''
        Create a session with empty stores.

        Use ``await Calculator.open(gateway)`` to get one with the stores
        already loaded.

        :param gateway: Persistence gateway shared by both stores.
        :param capacity: Size cap for each store; store default if None.
        '''
        self.state = buffer.clear()
        self.result = ''
        self.history = HistoryStore(gateway, capacity)
        self.saved_formulas = SavedFormulaStore(gateway, capacity)
        self.lexer = Lexer()
        self._listeners = []

    @classmethod
    async def open(cls, gateway, capacity=None):
        calculator = cls(gateway, capacity)
        await calculator.history.load()
        await calculator.saved_formulas.load()
        calculator._notify()
        return calculator

    @property
    def expression(self):
        return self.state.text

    @property
    def cursor(self):
        return self.state.cursor

    def subscribe(self, listener):
        '''
        Call listener(calculator) after every state change.
        '''
        self._listeners.append(listener)

    def unsubscribe(self, listener):
        self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    def _edit(self, state):
        self.state = state
        self._notify()

    def insert_character(self, fragment):
        self._edit(self.state.insert(fragment))

    def delete_before(self):
        self._edit(self.state.delete_before())

    def move_cursor_left(self):
        self._edit(self.state.move_left())

    def move_cursor_right(self):
        self._edit(self.state.move_right())

    def clear_expression(self):
        self.result = ''
        self._edit(buffer.clear())

    def load_formula(self, text):
        '''
        Replace the expression with text, cursor at its end, result blank.
        '''
        self.result = ''
        self._edit(self.state.load(text))

    def load_history_at(self, index):
        '''
        Load the expression half of history record index, if it exists.
        '''
        if 0 <= index < len(self.history):
            self.load_formula(self.history.expression_at(index))

    async def evaluate(self):
        '''
        Evaluate the expression, set result, and record it in history.

        Returns the Evaluation. Only successful, non-empty expressions are
        recorded; failures display as "Error".
        '''
        expression = self.expression
        evaluation = evaluate(expression, self.lexer)
        self.result = evaluation.display
        if evaluation.ok:
            if expression.strip():
                await self.history.add(expression, self.result)
        else:
            logger.debug('Evaluating %r failed: %s',
                         expression, evaluation.error)
        self._notify()
        return evaluation

    async def save_current_formula(self):
        changed = await self.saved_formulas.add(self.expression)
        if changed:
            self._notify()
        return changed

    async def remove_saved_formula_at(self, index):
        removed = await self.saved_formulas.remove_at(index)
        if removed is not None:
            self._notify()
        return removed

    async def clear_saved_formulas(self):
        await self.saved_formulas.clear()
        self._notify()

    async def clear_history(self):
        await self.history.clear()
        self._notify()
