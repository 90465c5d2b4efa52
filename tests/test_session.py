'''
Calculator session tests
'''

import asyncio

from smartcalc.gateway import MemoryGateway
from smartcalc.session import Calculator
from smartcalc.util import DivisionByZero


def type_in(calculator, text):
    for character in text:
        calculator.insert_character(character)


def test_open_loads_both_stores():
    gateway = MemoryGateway({'history': ['1+1 = 2'],
                             'saved_formulas': ['3*3']})
    calculator = asyncio.run(Calculator.open(gateway))
    assert calculator.history.items == ('1+1 = 2',)
    assert calculator.saved_formulas.items == ('3*3',)
    assert calculator.state == ('', 0)
    assert calculator.result == ''


def test_evaluate_records_history(calculator, gateway):
    type_in(calculator, '2+3×4')
    evaluation = asyncio.run(calculator.evaluate())
    assert evaluation.ok
    assert calculator.result == '14'
    assert calculator.history.items == ('2+3×4 = 14',)
    assert gateway.data['history'] == ['2+3×4 = 14']


def test_evaluate_twice_records_once(calculator):
    type_in(calculator, '5+5')
    asyncio.run(calculator.evaluate())
    asyncio.run(calculator.evaluate())
    assert calculator.history.items == ('5+5 = 10',)


def test_failed_evaluation_shows_error(calculator, gateway):
    type_in(calculator, '1/0')
    evaluation = asyncio.run(calculator.evaluate())
    assert isinstance(evaluation.error, DivisionByZero)
    assert calculator.result == 'Error'
    assert calculator.history.items == ()
    assert gateway.saves == []


def test_empty_evaluation_shows_error(calculator):
    asyncio.run(calculator.evaluate())
    assert calculator.result == 'Error'
    assert len(calculator.history) == 0


def test_editing(calculator):
    type_in(calculator, '13')
    calculator.move_cursor_left()
    calculator.insert_character('2')
    assert calculator.state == ('123', 2)
    calculator.move_cursor_right()
    calculator.delete_before()
    assert calculator.expression == '12'
    assert calculator.cursor == 2


def test_insert_then_delete_restores_empty(calculator):
    calculator.insert_character('9')
    calculator.delete_before()
    assert calculator.state == ('', 0)


def test_clear_expression_resets_result(calculator):
    type_in(calculator, '1+1')
    asyncio.run(calculator.evaluate())
    calculator.clear_expression()
    assert calculator.state == ('', 0)
    assert calculator.result == ''


def test_load_formula(calculator):
    type_in(calculator, '9')
    asyncio.run(calculator.evaluate())
    calculator.load_formula('3+4')
    assert calculator.state == ('3+4', 3)
    assert calculator.result == ''


def test_load_history_at(calculator):
    calculator.load_formula('6÷3')
    asyncio.run(calculator.evaluate())
    calculator.clear_expression()
    calculator.load_history_at(0)
    assert calculator.state == ('6÷3', 3)
    calculator.load_history_at(5)
    assert calculator.expression == '6÷3'


def test_save_current_formula(calculator, gateway):
    calculator.load_formula(' 2*7 ')
    assert asyncio.run(calculator.save_current_formula())
    assert calculator.saved_formulas.items == ('2*7',)
    assert gateway.data['saved_formulas'] == ['2*7']


def test_save_blank_formula_is_noop(calculator, gateway):
    calculator.load_formula('   ')
    assert not asyncio.run(calculator.save_current_formula())
    assert calculator.saved_formulas.items == ()
    assert gateway.saves == []


def test_remove_and_clear_saved(calculator):
    for formula in ('1', '2', '3'):
        calculator.load_formula(formula)
        asyncio.run(calculator.save_current_formula())
    assert asyncio.run(calculator.remove_saved_formula_at(0)) == '3'
    assert asyncio.run(calculator.remove_saved_formula_at(7)) is None
    assert calculator.saved_formulas.items == ('2', '1')
    asyncio.run(calculator.clear_saved_formulas())
    assert calculator.saved_formulas.items == ()


def test_clear_history(calculator, gateway):
    calculator.load_formula('1+2')
    asyncio.run(calculator.evaluate())
    asyncio.run(calculator.clear_history())
    assert calculator.history.items == ()
    assert gateway.data['history'] == []


def test_persistence_failure_is_not_fatal():
    gateway = MemoryGateway(fail=True)
    calculator = asyncio.run(Calculator.open(gateway))
    calculator.load_formula('2*21')
    asyncio.run(calculator.evaluate())
    assert calculator.result == '42'
    assert calculator.history.items == ('2*21 = 42',)


def test_listeners_notified(calculator):
    seen = []

    def listener(calc):
        seen.append((calc.expression, calc.result))

    calculator.subscribe(listener)
    calculator.insert_character('4')
    asyncio.run(calculator.evaluate())
    calculator.unsubscribe(listener)
    calculator.clear_expression()
    assert seen == [('4', ''), ('4', '4')]


def test_unchanged_store_does_not_notify(calculator):
    seen = []
    calculator.subscribe(seen.append)
    asyncio.run(calculator.save_current_formula())
    asyncio.run(calculator.remove_saved_formula_at(0))
    assert seen == []
