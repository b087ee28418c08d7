'''
Equation tokens, and the ordered buffer holding them.

The buffer knows nothing of keypresses; see editor for that.
'''

import regex

from .util import KeypadError


OPERATORS = ('+', '-', '*', '/')
# What keypads, and people, tend to type instead.
OPERATOR_ALIASES = {
    '×': '*',
    'x': '*',
    '÷': '/',
    '−': '-',
}
MINUS = '-'
MULTIPLY = '*'
DECIMAL = '.'
BRACKET_OPEN = '('
BRACKET_CLOSE = ')'
DIGITS = '0123456789'

# Maximum count of digits in a single number.
MAX_DIGITS = 9

# Number as it may sit on the buffer: 12, 12., 0.5, 1.2346E-5, and the
# transient 1.2346E or 1.2346E- while an exponent sign is being typed.
NUMERAL = regex.compile(r'(?:\d+\.?\d*|\.\d+)(?:[Ee][-+]?\d*)?')
EXPONENT_PENDING = regex.compile(r'[Ee][-+]?$')
NEGATIVE_COMPONENT = regex.compile(r'(\()\-(.*?)(\))')


class Token:
    '''
    One element of an equation.

    Tokens are immutable; equal when of the same kind and text.
    '''
    __slots__ = ()

    @property
    def text(self):
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and self.text == other.text

    def __hash__(self):
        return hash((type(self), self.text))

    def __str__(self):
        return self.text

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.text)


class Operator(Token):
    __slots__ = 'symbol',

    def __init__(self, symbol):
        self.symbol = symbol

    @property
    def text(self):
        return self.symbol


class Bracket(Token):
    __slots__ = 'symbol',

    def __init__(self, symbol):
        self.symbol = symbol

    @property
    def text(self):
        return self.symbol


class Number(Token):
    '''
    Numeric literal.

    The magnitude is kept as typed in digits, sign separately; negative
    numbers show as (-digits).
    '''
    __slots__ = 'digits', 'negative'

    def __init__(self, digits, negative=False):
        self.digits = digits
        self.negative = negative

    @classmethod
    def parse(cls, text):
        '''
        Parse 12, (-12), or a bare -12 as left behind by a result.
        '''
        match = NEGATIVE_COMPONENT.fullmatch(text)
        if match:
            return cls(match.group(2), negative=True)
        if text.startswith(MINUS):
            return cls(text[1:], negative=True)
        return cls(text)

    @property
    def text(self):
        if self.negative:
            return '(-' + self.digits + ')'
        return self.digits

    def digitcount(self):
        return len(regex.sub(r'\D', '', self.digits))

    def hasdecimal(self):
        return DECIMAL in self.digits

    def hasexponent(self):
        return 'E' in self.digits.upper()

    def exponentpending(self):
        '''
        Return True if an exponent marker still waits for its digits.
        '''
        return EXPONENT_PENDING.search(self.digits) is not None

    def negated(self):
        return type(self)(self.digits, not self.negative)

    def shortened(self):
        '''
        Drop the last typed character, and any exponent marker that exposes.
        '''
        return type(self)(EXPONENT_PENDING.sub('', self.digits[:-1]),
                          self.negative)


def isoperator(value):
    return getattr(value, 'text', value) in OPERATORS


def isbracket(value):
    return getattr(value, 'text', value) in (BRACKET_OPEN, BRACKET_CLOSE)


def isnegativecomponent(component):
    '''
    Return True if the component is a parenthesized negative, like (-5).
    '''
    return NEGATIVE_COMPONENT.search(getattr(component, 'text',
                                             component)) is not None


def token(text):
    '''
    Build the token shown as text.
    '''
    text = OPERATOR_ALIASES.get(text, text)
    if isoperator(text):
        return Operator(text)
    if isbracket(text):
        return Bracket(text)
    number = Number.parse(text)
    if not NUMERAL.fullmatch(number.digits):
        raise KeypadError('Not an equation token: {!r}'.format(text))
    return number


class Equation:
    '''
    Ordered buffer of equation tokens.
    '''

    def __init__(self, tokens=()):
        self.tokens = list(tokens)

    @classmethod
    def from_texts(cls, texts):
        return cls(token(text) for text in texts)

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def texts(self):
        return [token.text for token in self.tokens]

    def join(self, separator=' '):
        return separator.join(self.texts())

    def clear(self):
        self.tokens.clear()

    def last(self, correct=False):
        '''
        Return the last token, or None if empty.

        :param correct: Canonicalize a trailing decimal point away, in
                        place: 12. becomes 12.
        '''
        if not self.tokens:
            return None
        last = self.tokens[-1]
        if correct and isinstance(last, Number) and \
           last.digits.endswith(DECIMAL):
            last = Number(last.digits[:-1], last.negative)
            self.tokens[-1] = last
        return last

    def replace_last(self, token):
        if self.tokens:
            self.tokens[-1] = token

    def append(self, token):
        self.tokens.append(token)

    def drop_last(self):
        if self.tokens:
            self.tokens.pop()

    def count(self, token):
        return sum(1 for other in self.tokens if other == token)

    def replace_head(self, token, keep):
        '''
        Replace everything but the last keep tokens with token.
        '''
        tail = self.tokens[len(self.tokens) - keep:] if keep else []
        self.tokens[:] = [token] + tail
