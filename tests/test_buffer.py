'''
Expression buffer tests
'''

from smartcalc.buffer import ExpressionState, clear


def test_insert_into_empty_then_delete():
    state = clear().insert('7')
    assert state == ('7', 1)
    assert state.delete_before() == ('', 0)


def test_insert_at_cursor():
    state = ExpressionState('1+3', 2).insert('2*')
    assert state == ('1+2*3', 4)


def test_cursor_clamped_on_construction():
    assert ExpressionState('12', 9).cursor == 2
    assert ExpressionState('12', -4).cursor == 0
    assert ExpressionState('12').cursor == 2


def test_delete_before_at_start_is_noop():
    state = ExpressionState('12', 0)
    assert state.delete_before() == state


def test_delete_before_middle():
    assert ExpressionState('123', 2).delete_before() == ('13', 1)


def test_moves_clamp():
    state = ExpressionState('ab', 0)
    assert state.move_left() == ('ab', 0)
    assert state.move_right().move_right().move_right() == ('ab', 2)
    assert ExpressionState('ab', 2).move_left() == ('ab', 1)


def test_load_puts_cursor_at_end():
    assert clear().load('3+4') == ('3+4', 3)


def test_split():
    assert ExpressionState('12+3', 2).split() == ('12', '+3')


def test_clear():
    assert clear() == ExpressionState('', 0)
