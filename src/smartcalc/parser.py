'''
Precedence climbing parser and tree walker for infix arithmetic.

Grammar, lowest precedence first::

    expr   := term (('+' | '-') term)*
    term   := factor (('*' | '/') factor)*
    factor := NUMBER | '(' expr ')' | '-' factor

Binary operators associate left to right. Unary minus binds tighter than any
binary operator.
'''

from collections import namedtuple
import operator

from .util import DivisionByZero, ExpressionSyntaxError


Literal = namedtuple('Literal', 'value')
BinaryOp = namedtuple('BinaryOp', 'op left right')
UnaryMinus = namedtuple('UnaryMinus', 'operand')


class Parser:
    '''
    Builds an AST from a token iterable, with one token of lookahead.

    One parser per expression; tokens may be a lazy generator.
    '''

    # Binary operators by precedence level, loosest first.
    LEVELS = ('+-', '*/')

    def __init__(self, tokens):
        self.tokens = iter(tokens)
        self.current = next(self.tokens, None)

    def _advance(self):
        token = self.current
        self.current = next(self.tokens, None)
        return token

    def _peek_operator(self, symbols):
        return (self.current is not None and
                self.current.kind == 'operator' and
                self.current.value in symbols)

    def parse(self):
        '''
        Parse the whole token sequence into a single tree.
        '''
        if self.current is None:
            raise ExpressionSyntaxError('Empty expression')
        tree = self._binary(0)
        if self.current is not None:
            raise ExpressionSyntaxError(
                'Unexpected {0!r} after complete expression'.format(
                    self.current.value))
        return tree

    def _binary(self, level):
        if level == len(type(self).LEVELS):
            return self._factor()
        symbols = type(self).LEVELS[level]
        left = self._binary(level + 1)
        while self._peek_operator(symbols):
            op = self._advance().value
            left = BinaryOp(op, left, self._binary(level + 1))
        return left

    def _factor(self):
        token = self._advance()
        if token is None:
            raise ExpressionSyntaxError('Expression ends where an operand '
                                        'was expected')
        if token.kind == 'number':
            try:
                return Literal(float(token.value))
            except ValueError:
                raise ExpressionSyntaxError(
                    'Bad number {0!r}'.format(token.value)) from None
        if token.kind == 'lparen':
            tree = self._binary(0)
            closing = self._advance()
            if closing is None or closing.kind != 'rparen':
                raise ExpressionSyntaxError('Unmatched (')
            return tree
        if token.kind == 'operator' and token.value == '-':
            return UnaryMinus(self._factor())
        raise ExpressionSyntaxError(
            'Expected an operand, got {0!r}'.format(token.value))


def parse(tokens):
    return Parser(tokens).parse()


BINARY = {
    '+': operator.__add__,
    '-': operator.__sub__,
    '*': operator.__mul__,
    '/': operator.__truediv__,
}


def walk(tree):
    '''
    Evaluate a tree post-order to a float.

    Dividing by a divisor that evaluates to exactly zero raises
    DivisionByZero; everything else is plain IEEE arithmetic. Uses an
    explicit stack, so long operator chains don't hit the recursion limit.
    '''
    pending = [(tree, False)]
    values = []
    while pending:
        node, visited = pending.pop()
        if isinstance(node, Literal):
            values.append(node.value)
        elif not visited:
            pending.append((node, True))
            if isinstance(node, UnaryMinus):
                pending.append((node.operand, False))
            else:
                # Left operand comes off the stack first.
                pending.append((node.right, False))
                pending.append((node.left, False))
        elif isinstance(node, UnaryMinus):
            values.append(-values.pop())
        else:
            right = values.pop()
            left = values.pop()
            if node.op == '/' and right == 0:
                raise DivisionByZero('Division by zero')
            values.append(BINARY[node.op](left, right))
    return values.pop()
