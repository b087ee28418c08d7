from functools import wraps


class KeypadError(Exception):
    pass


class EquationInvalidFormatError(KeypadError):
    '''
    Equation ends in an operator or an exponent still waiting for digits.
    '''
    def __init__(self, message='Invalid format used'):
        super().__init__(message)


class DivisionByZeroError(KeypadError):
    def __init__(self, message='Cannot divide by zero'):
        super().__init__(message)


class CalculationError(KeypadError):
    def __init__(self, message='Calculation error', *args):
        super().__init__(message, *args)


class InfinityError(KeypadError):
    '''
    Result too large for any display.

    Keeps the sign around, so "Infinity" and "-Infinity" can be told apart.
    '''
    def __init__(self, positive=True):
        super().__init__('Infinity' if positive else '-Infinity')
        self.positive = positive


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to calculation errors.

    Passes through KeypadErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except KeypadError:
                raise
            except Exception as e:
                raise CalculationError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
