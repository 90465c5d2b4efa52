'''
Editable expression text with a cursor.

Every operation returns a new ExpressionState; none of them fail. Positions
out of range are clamped into [0, len(text)].
'''

from collections import namedtuple


def _clamp(index, text):
    return max(0, min(index, len(text)))


class ExpressionState(namedtuple('ExpressionState', 'text cursor')):
    '''
    Immutable expression buffer: text plus a cursor between characters.

    0 is before the first character, len(text) after the last.
    '''
    __slots__ = ()

    def __new__(cls, text='', cursor=None):
        if cursor is None:
            cursor = len(text)
        return super().__new__(cls, text, _clamp(cursor, text))

    def insert(self, fragment):
        '''
        Splice fragment in at the cursor, leaving the cursor after it.
        '''
        cursor = _clamp(self.cursor, self.text)
        text = self.text[:cursor] + fragment + self.text[cursor:]
        return type(self)(text, cursor + len(fragment))

    def delete_before(self):
        '''
        Remove the character left of the cursor, like backspace.
        '''
        if self.cursor == 0:
            return self
        cursor = self.cursor - 1
        return type(self)(self.text[:cursor] + self.text[cursor + 1:], cursor)

    def move_left(self):
        return type(self)(self.text, self.cursor - 1)

    def move_right(self):
        return type(self)(self.text, self.cursor + 1)

    def load(self, text):
        '''
        Replace the whole text, cursor at its end.
        '''
        return type(self)(text)

    def split(self):
        '''
        Return the text left and right of the cursor.
        '''
        return self.text[:self.cursor], self.text[self.cursor:]


def clear():
    return ExpressionState('', 0)
