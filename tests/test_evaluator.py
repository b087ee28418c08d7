'''
Evaluation and result formatting tests
'''

import math

from keycalc.util import (CalculationError, DivisionByZeroError,
                          InfinityError)
from keycalc.evaluator import (check_division_by_zero, compute, evaluate,
                               format_value, render, trim)

from pytest import raises, mark


def test_precedence():
    assert evaluate('5 + 3 * 2') == 11
    assert evaluate('( 5 + 3 ) * 2') == 16
    assert evaluate('8 / 2 / 2') == 2
    assert evaluate('8 - 2 - 2') == 4


def test_negatives():
    assert evaluate('5 / (-2)') == -2.5
    # Leading minus, before brackets
    assert evaluate('- ( 2 + 3 )') == -5


def test_exponent_literal():
    assert evaluate('2 * 1.5E3') == 3000


def test_ieee_division():
    assert evaluate('5 / ( 0 )') == math.inf
    assert evaluate('(-5) / ( 0 )') == -math.inf
    assert math.isnan(evaluate('( 0 ) / ( 0 )'))


@mark.parametrize('expression', ['( 5 + 3', '5 3', '5 * )', '', '( )'])
def test_malformed(expression):
    with raises(CalculationError):
        evaluate(expression)


def test_deep_nesting():
    with raises(CalculationError):
        evaluate('( ' * 2000 + '1' + ' )' * 2000)


def test_division_by_zero_scan():
    for expression in ['5 / 0', '5 / (-0)', '5 / 0.0', '1 + 5 / 0.']:
        with raises(DivisionByZeroError):
            check_division_by_zero(expression)
    check_division_by_zero('5 / 0.5')
    check_division_by_zero('0 / 5')
    check_division_by_zero('5 / 10')


def test_compute():
    assert compute('5 + 3') == '8'
    assert compute('1 / 3') == '0.333333333'


def test_compute_errors():
    with raises(DivisionByZeroError):
        compute('5 / (-0)')
    with raises(InfinityError) as info:
        compute('5 / ( 0 )')
    assert info.value.positive
    with raises(InfinityError) as info:
        compute('(-1E300) * 1E300')
    assert not info.value.positive
    assert info.value.args[0] == '-Infinity'
    with raises(CalculationError):
        compute('( 0 ) / ( 0 )')
    with raises(CalculationError):
        compute('( 5 + 3')


def test_compute_snaps_noise_to_zero():
    assert compute('1E-301 * 1') == '0'


def test_render():
    assert render(0.0) == '0'
    assert render(100.0) == '100'
    assert render(-2.5) == '-2.5'
    assert render(0.000001) == '0.000001'
    assert render(1e-7) == '1e-7'
    assert render(1.5e21) == '1.5e+21'
    assert render(123456789.96) == '123456789.96'


def test_trim():
    assert trim('0.333333333', 9) == '0.333333333'
    assert trim('12.500000000', 9) == '12.5'
    assert trim('0.000012346', 9) == '0.000012346'
    assert trim('1234567890.500000000', 9) == '1234567890'
    assert trim('0.000000000', 9) == '0'


@mark.parametrize('value, formatted', [
    (8.0, '8'),
    (-5.0, '-5'),
    (-0.0, '0'),
    (0.1 + 0.2, '0.3'),
    (1 / 3, '0.333333333'),
    (2 / 3, '0.666666667'),
    (-1 / 3, '-0.333333333'),
    (0.00001, '0.00001'),
    (1.2346e-5, '0.000012346'),
    (123456789.5, '123456789'),
    (1234567890.5, '1234567890'),
])
def test_format_plain(value, formatted):
    assert format_value(value) == formatted


def test_format_rounds_up_from_95():
    assert format_value(123456789.96) == '123456790'
    assert format_value(-123456789.96) == '-123456790'
    assert format_value(123456789.94) == '123456789'


@mark.parametrize('value, formatted', [
    (1e10, '1.00000E10'),
    (123456789012.0, '1.23457E11'),
    (-123456789012.0, '-1.23457E11'),
    (1e-7, '1.00000E-7'),
    (1.5e21, '1.50000E21'),
])
def test_format_exponential(value, formatted):
    assert format_value(value) == formatted


def test_format_specials():
    assert format_value(math.nan) == 'NaN'
    assert format_value(math.inf) == 'Infinity'
    assert format_value(-math.inf) == '-Infinity'
