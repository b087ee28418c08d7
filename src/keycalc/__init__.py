'''
Keypad calculator.

Builds an arithmetic equation one keypress at a time, the way a pocket
calculator does: digits, + - * /, decimal point, brackets, sign toggle,
delete and equals. The equation stays a coherent, if unfinished,
expression after every key; equals evaluates it and formats the result for
a nine digit display.

Pressing equals again repeats the last operation on the result, and an
operator right after equals carries on from the result.
'''

from .cli import CLI
from .editor import Editor
from .lexer import Lexer


__all__ = 'Editor', 'Lexer', 'CLI'
