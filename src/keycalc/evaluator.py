'''
Evaluation of finished equations, and formatting of their results for a
fixed width, pocket calculator display.

Holds no state between calls.
'''

from decimal import Decimal, localcontext, ROUND_HALF_UP
import logging
import math
import operator

import regex

from .equation import DECIMAL, MAX_DIGITS
from .lexer import Lexer
from .util import (CalculationError, DivisionByZeroError, InfinityError,
                   wrap_user_errors)


log = logging.getLogger(__name__)

# Anything smaller is rounding noise, and is zero.
EPSILON = 1.0E-300
# Anything this large no longer fits the display.
EXPONENTIAL_THRESHOLD = 10 ** 10
EXPONENTIAL_DIGITS = 5
# Divisor literal, possibly a negative one: / 0, / (-0.0)
DIVISOR = regex.compile(r'/\s*(\(?-?(?<number>\d+\.?\d*|\.\d+)\)?)')
FRACTION_HEAD = regex.compile(r'\d{1,2}')


def _divide(left, right):
    '''
    IEEE division: x/0 is a signed infinity, 0/0 is NaN.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)


class Parser:
    '''
    Recursive descent parser and evaluator for lexed equations.

    Grammar, loosest binding first:

        expression := term (('+' | '-') term)*
        term       := unary (('*' | '/') unary)*
        unary      := ('+' | '-') unary | primary
        primary    := number | negative | '(' expression ')'

    Unary signs only show up after a leading minus, as in - ( 2 + 3 ).
    '''

    BINARY = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _divide,
    }
    UNARY = {
        '+': operator.__pos__,
        '-': operator.__neg__,
    }

    def __init__(self, lexemes):
        self.lexemes = list(lexemes)
        self.position = 0

    def _peek(self):
        if self.position < len(self.lexemes):
            return self.lexemes[self.position]
        return {}

    def _next(self):
        groups = self._peek()
        if not groups:
            raise CalculationError('Unexpected end of equation')
        self.position += 1
        return groups

    def _accept(self, kind, symbols):
        '''
        Consume and return the next symbol if it's one of those expected.
        '''
        symbol = self._peek().get(kind)
        if symbol is not None and symbol in symbols:
            self.position += 1
            return symbol
        return None

    def parse(self):
        value = self.expression()
        if self.position != len(self.lexemes):
            raise CalculationError('Unexpected {}'.format(
                ''.join(self._peek().values())))
        return value

    def expression(self):
        value = self.term()
        while True:
            symbol = self._accept('operator', '+-')
            if symbol is None:
                return value
            value = self.BINARY[symbol](value, self.term())

    def term(self):
        value = self.unary()
        while True:
            symbol = self._accept('operator', '*/')
            if symbol is None:
                return value
            value = self.BINARY[symbol](value, self.unary())

    def unary(self):
        symbol = self._accept('operator', '+-')
        if symbol is not None:
            return self.UNARY[symbol](self.unary())
        return self.primary()

    def primary(self):
        if self._accept('bracket', '('):
            value = self.expression()
            if not self._accept('bracket', ')'):
                raise CalculationError('Missing )')
            return value
        groups = self._next()
        if 'negative' in groups:
            return -float(groups['magnitude'])
        if 'number' in groups:
            return float(groups['number'])
        raise CalculationError('Unexpected {}'.format(
            ''.join(groups.values())))


@wrap_user_errors('Cannot evaluate {0}')
def evaluate(expression):
    '''
    Evaluate joined equation text to a float.
    '''
    lexer = Lexer()
    return Parser(lexer.lexemes(expression)).parse()


def check_division_by_zero(expression):
    '''
    Raise if any divisor is a literal zero, sign and brackets aside.
    '''
    for match in DIVISOR.finditer(expression):
        if float(match.group('number')) == 0:
            raise DivisionByZeroError()


def render(value):
    '''
    Shortest round-tripping rendering of value.

    Plain for 1e-6 <= |value| < 1e21 (0.000001, 123.5), exponential otherwise
    (1e-7, 1.5e+21).
    '''
    if value == 0:
        return '0'
    sign = '-' if value < 0 else ''
    _, digits, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = ''.join(map(str, digits))
    # value is 0.digits times 10 ** point
    point = exponent + len(digits)
    if len(digits) <= point <= 21:
        return sign + digits + '0' * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + DECIMAL + digits[point:]
    if -6 < point <= 0:
        return sign + '0' + DECIMAL + '0' * -point + digits
    mantissa = digits[0]
    if len(digits) > 1:
        mantissa += DECIMAL + digits[1:]
    return '{}{}e{:+d}'.format(sign, mantissa, point - 1)


def to_fixed(value, places):
    '''
    Render value with exactly places decimals, ties away from zero.
    '''
    with localcontext() as context:
        context.prec = 64
        context.rounding = ROUND_HALF_UP
        fixed = Decimal(value).quantize(Decimal(1).scaleb(-places))
        return '{:f}'.format(fixed)


def to_exponential(value, places):
    '''
    Render value as d.ddddde+x, with places mantissa decimals.
    '''
    with localcontext() as context:
        context.prec = places + 1
        context.rounding = ROUND_HALF_UP
        rounded = context.plus(Decimal(value))
        return '{:.{}e}'.format(rounded, places)


def trim(fixed, digits):
    '''
    Cut plain rendering down to digits significant digits, and drop trailing
    zeros.

    Neither integral digits nor leading zeros count against the limit; the
    integral part is never cut.
    '''
    integral, _, fractional = fixed.partition(DECIMAL)
    significant = len(integral.lstrip('-').lstrip('0'))
    kept = ''
    for digit in fractional:
        if significant >= digits:
            break
        kept += digit
        if significant or digit != '0':
            significant += 1
    kept = kept.rstrip('0')
    return integral + DECIMAL + kept if kept else integral


def format_value(value, digits=MAX_DIGITS):
    '''
    Format a result for the display, and as seed for the next equation.
    '''
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        # No -0
        value = 0.0

    unsigned = render(abs(value))
    point = unsigned.find(DECIMAL)
    if point >= digits:
        # Fraction won't fit: 0.95 and higher round the integral part up,
        # like handheld calculators do.
        head = FRACTION_HEAD.match(unsigned, point + 1)
        if head and int(head.group()) >= 95:
            value += math.copysign(1, value)

    formatted = None
    if abs(value) < EXPONENTIAL_THRESHOLD and 'e' not in render(value):
        formatted = trim(to_fixed(value, digits), digits)
        if formatted.lstrip('-') == '0' and value != 0:
            formatted = None
    if formatted is None:
        formatted = to_exponential(value, EXPONENTIAL_DIGITS)
    return formatted.upper().replace('E+', 'E')


def compute(expression):
    '''
    Evaluate joined equation text, and format the result.

    Raises the KeypadError matching whatever went wrong.
    '''
    check_division_by_zero(expression)
    try:
        value = evaluate(expression)
    except CalculationError:
        log.debug('Cannot evaluate %r', expression, exc_info=True)
        raise
    if abs(value) < EPSILON:
        value = 0.0
    if math.isnan(value):
        raise CalculationError('Not a number')
    if math.isinf(value):
        raise InfinityError(value > 0)
    return format_value(value)
