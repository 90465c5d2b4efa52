from collections import namedtuple
from functools import reduce
import operator

import regex

from .util import ExpressionSyntaxError


Token = namedtuple('Token', 'kind value')

# Display-only glyphs to their canonical ASCII operators.
GLYPHS = str.maketrans({
    '\N{MULTIPLICATION SIGN}': '*',
    '\N{DIVISION SIGN}': '/',
    '\N{MIDDLE DOT}': '*',
    '\N{ASTERISK OPERATOR}': '*',
    '\N{DIVISION SLASH}': '/',
    '\N{MINUS SIGN}': '-',
})


def normalize(text):
    '''
    Substitute display glyphs (× ÷ and friends) with ASCII operators.
    '''
    return text.translate(GLYPHS)


class Lexer:
    '''
    Lexer for the infix arithmetic *regular* grammar.

    For consistency, needs to be instantiated, despite holding no internal
    state. Lexing is restartable: every call rescans the text from scratch.
    '''
    # Number, of any kind supported by grammar.
    NUMBER = r'''
              (?:
                  # 1, 12, 12. (notice trailing dot), 1.3
                  [0-9]+
                  (?:
                      \.
                      [0-9]*
                  )?
              )|(?:
                  # .2
                  \.
                  [0-9]+
              )
              '''
    OPERATORS = '+-*/'
    OPERATOR = r'[' + regex.escape(OPERATORS) + r']'
    LPAREN = r'\('
    RPAREN = r'\)'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>' + LPAREN + r')|' \
             r'(?<rparen>' + RPAREN + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self):
        self.pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)

    def matches(self, text):
        '''
        Yield regex matches for every lexeme of text, whitespace included.

        Raises on the first character no lexeme matches.
        '''
        position = 0
        while position < len(text):
            match = self.pattern.match(text, position)
            if match is None:
                raise ExpressionSyntaxError(
                    "Couldn't lex {0!r} at offset {1}".format(
                        text[position:].strip(), position))
            yield match
            position = match.end()

    def lex(self, text):
        '''
        Take normalized text and lazily yield its Tokens, skipping whitespace.
        '''
        for match in self.matches(text):
            kind = match.lastgroup
            if kind != 'space':
                yield Token(kind, match.group(kind))
