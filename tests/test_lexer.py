'''
Equation lexer tests
'''

import regex

from keycalc.util import CalculationError
from keycalc.lexer import Lexer

from pytest import raises


def test_numbers_operators_brackets():
    l = Lexer()
    lexemes = list(l.lexemes('12 * ( 3 + 4.5 )'))
    assert lexemes == [{'number': '12'},
                       {'operator': '*'},
                       {'bracket': '('},
                       {'number': '3'},
                       {'operator': '+'},
                       {'number': '4.5'},
                       {'bracket': ')'}]


def test_negative_is_one_lexeme():
    l = Lexer()
    lexemes = list(l.lexemes('5 / (-0.5)'))
    assert lexemes[-1] == {'negative': '(-0.5)', 'magnitude': '0.5'}
    assert len(lexemes) == 3


def test_exponent_is_part_of_number():
    l = Lexer()
    assert list(l.lexemes('1.2346E-5')) == [{'number': '1.2346E-5'}]
    assert list(l.lexemes('(-1.2346E10)')) == [{'negative': '(-1.2346E10)',
                                               'magnitude': '1.2346E10'}]


def test_trailing_dot():
    l = Lexer()
    assert list(l.lexemes('12.')) == [{'number': '12.'}]


def test_spaces_not_feedable():
    l = Lexer()
    matches = list(l.lex('1 + 2'))
    assert len(matches) == 5
    assert [l.isfeedable(m) for m in matches] == [True, False, True, False,
                                                  True]


def test_unknown_character():
    l = Lexer()
    with raises(CalculationError, match=regex.escape("Couldn't lex $ 3")):
        list(l.lex('5 $ 3'))
