from .equation import (BRACKET_CLOSE, BRACKET_OPEN, DECIMAL, DIGITS, MINUS,
                       MULTIPLY, OPERATOR_ALIASES, OPERATORS, MAX_DIGITS,
                       Bracket, Equation, Number, Operator,
                       isnegativecomponent)
from .evaluator import compute
from .util import EquationInvalidFormatError


class Editor:
    '''
    Pocket calculator equation, built up one keypress at a time.

    Every edit leaves the equation a syntactically coherent, if unfinished,
    arithmetic expression. After a successful calculate(), the equation is
    calculated: the next digit, decimal point or bracket starts over, while
    an operator, sign change or delete carries on from the result.
    '''

    MAX_DIGITS = MAX_DIGITS

    def __init__(self):
        '''
        Create empty editor.
        '''
        self.equation = Equation()
        self.calculated = False
        self.last_result = ''

    def init(self):
        self.reset()

    def reset(self):
        '''
        Clear the equation.
        '''
        self.equation.clear()
        self.calculated = False

    def is_empty(self):
        return len(self.equation) == 0

    def current_equation(self):
        '''
        Return token texts, for display.
        '''
        return self.equation.texts()

    def load(self, texts):
        '''
        Replace the equation with one previously shown by current_equation().
        '''
        self.reset()
        self.equation = Equation.from_texts(texts)

    def is_negative_component(self, component):
        return isnegativecomponent(component)

    def _replace_last(self, token):
        if len(self.equation):
            self.equation.replace_last(token)
            self.calculated = False

    def _add(self, *tokens):
        for token in tokens:
            self.equation.append(token)
        self.calculated = False

    def _drop_last(self):
        self.equation.drop_last()
        self.calculated = False

    def _reseed(self):
        '''
        Start over from the last result.
        '''
        self.reset()
        self._add(Number.parse(self.last_result))

    def _isplaceholder(self, last):
        '''
        Return True for a lone minus, waiting to sign the first number.
        '''
        return isinstance(last, Operator) and last.symbol == MINUS and \
            len(self.equation) == 1

    def add_digit(self, digit):
        '''
        Add digit to the equation.

        Returns False, leaving the equation be, if the number would grow
        beyond MAX_DIGITS digits.
        '''
        digit = str(digit)
        if len(digit) != 1 or digit not in DIGITS:
            return False
        if self.calculated:
            self.reset()

        last = self.equation.last()
        if self._isplaceholder(last):
            number = Number(digit, negative=True)
        elif not isinstance(last, Number):
            # After nothing, an operator or a bracket: a number of its own
            self._add(Number(digit))
            return True
        elif last.negative:
            # No (-05)
            digits = '' if last.digits == '0' else last.digits
            number = Number(digits + digit, negative=True)
        elif last.digits == '0':
            number = Number(digit)
        else:
            number = Number(last.digits + digit)

        if number.digitcount() > self.MAX_DIGITS:
            return False
        self._replace_last(number)
        return True

    def add_operator(self, symbol):
        '''
        Add operator to the equation, overwriting one just typed.

        Returns True if the equation took it.
        '''
        symbol = OPERATOR_ALIASES.get(symbol, symbol)
        if symbol not in OPERATORS:
            return False
        if self.calculated:
            self._reseed()

        last = self.equation.last(correct=True)
        # Only a minus can start an equation, and it can't be replaced
        if last is None and symbol != MINUS:
            return False
        if self._isplaceholder(last):
            return False

        if isinstance(last, Operator):
            self._replace_last(Operator(symbol))
        elif isinstance(last, Number) and last.exponentpending():
            # Only the exponent sign fits here
            if symbol != MINUS or not last.digits.upper().endswith('E'):
                return False
            self._replace_last(Number(last.digits + MINUS, last.negative))
        else:
            self._add(Operator(symbol))
        return True

    def add_decimal(self):
        '''
        Add decimal point to the last number, or start a new 0. one.
        '''
        if self.calculated:
            self.reset()

        last = self.equation.last()
        if self._isplaceholder(last):
            self._replace_last(Number('0' + DECIMAL, negative=True))
        elif not isinstance(last, Number):
            self._add(Number('0' + DECIMAL))
        elif not last.hasdecimal() and not last.hasexponent():
            self._replace_last(Number(last.digits + DECIMAL, last.negative))

    def add_bracket(self):
        '''
        Add whichever bracket makes sense: open, close, or ×( after a number.
        '''
        if self.calculated:
            self.reset()

        last = self.equation.last()
        opened = self.equation.count(Bracket(BRACKET_OPEN))
        closed = self.equation.count(Bracket(BRACKET_CLOSE))

        if last is None:
            signs = BRACKET_OPEN,
        elif isinstance(last, Bracket):
            if last.symbol == BRACKET_CLOSE and opened > closed:
                signs = BRACKET_CLOSE,
            else:
                # Brackets next to each other open; no ()
                signs = BRACKET_OPEN,
        elif isinstance(last, Number) and opened == closed:
            # All brackets closed: a bracket after a number multiplies it
            signs = MULTIPLY, BRACKET_OPEN
        elif isinstance(last, Operator):
            signs = BRACKET_OPEN,
        elif opened > closed:
            signs = BRACKET_CLOSE,
        else:
            signs = BRACKET_OPEN,

        self._add(*[Operator(sign) if sign == MULTIPLY else Bracket(sign)
                    for sign in signs])

    def change_sign(self):
        '''
        Toggle sign of the last number.

        Returns True if the sign was changed.
        '''
        if self.calculated:
            self._reseed()

        last = self.equation.last()
        if not isinstance(last, Number) or last.text == '0':
            return False
        self._replace_last(last.negated())
        return True

    def delete_last(self):
        '''
        Delete the last typed character.

        Right after calculate(), starts over from the result instead.
        '''
        if self.calculated:
            self._reseed()
            return

        last = self.equation.last()
        if last is None:
            return
        if isinstance(last, Number) and last.negative:
            if len(last.digits) == 1:
                self._drop_last()
            else:
                self._replace_last(last.shortened())
        elif len(last.text) == 1:
            self._drop_last()
        else:
            self._replace_last(last.shortened())

    def is_valid_equation(self):
        '''
        Return True if the equation can be calculated as it stands.
        '''
        last = self.equation.last(correct=True)
        if last is None or isinstance(last, Operator):
            return False
        return not (isinstance(last, Number) and last.exponentpending())

    def _replace_left_operand(self, value):
        '''
        Replace all but the trailing operator and operand with value.

        Calculating again then repeats the last operation on the result.
        '''
        length = len(self.equation)
        if not length:
            return
        self.equation.replace_head(Number.parse(value),
                                   keep=2 if length > 2 else 0)
        self.calculated = False

    def calculate(self):
        '''
        Calculate the equation, returning the formatted result.

        The equation is left as it is; the result is kept for whatever
        comes next.
        '''
        if self.calculated:
            self._replace_left_operand(self.last_result)

        if not self.is_valid_equation():
            raise EquationInvalidFormatError()

        self.calculated = False
        result = compute(self.equation.join())
        self.calculated = True
        self.last_result = result
        return result
