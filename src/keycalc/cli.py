from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import KeypadError
from .editor import Editor
from .equation import DIGITS, OPERATORS, OPERATOR_ALIASES
from .lexer import Lexer


# Keys other than digits and operators, and what they do.
KEYS = {
    '.': 'add_decimal',
    ',': 'add_decimal',
    '(': 'add_bracket',
    ')': 'add_bracket',
    # _ for negation, like in dc
    '_': 'change_sign',
    '~': 'change_sign',
    '<': 'delete_last',
    'c': 'reset',
    '=': 'calculate',
}


def press(editor, key):
    '''
    Feed one keypress to the editor.

    Returns the result for =, None otherwise.
    '''
    if key in DIGITS:
        if not editor.add_digit(key):
            print('At most {} digits'.format(editor.MAX_DIGITS),
                  file=sys.stderr)
    elif key in OPERATORS or key in OPERATOR_ALIASES:
        editor.add_operator(key)
    elif key in KEYS:
        return getattr(editor, KEYS[key])()
    else:
        raise KeypadError('No such key {}'.format(repr(key)))
    return None


def display(editor):
    return ' '.join(editor.current_equation())


class InteractiveInput:
    def __init__(self, prompt, toolbar=None):
        self.prompt = prompt
        self.toolbar = toolbar

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    # Equation being typed
                                    bottom_toolbar=self.toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the keypad calculator.

    Every character typed is a key.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump every keypress, the equation after it, and whether calculated.
        '''
        editor = Editor()
        print('<key>\t<equation>\t<calculated>')
        for line in self.args.expressions:
            try:
                for key in line.strip():
                    if key.isspace():
                        continue
                    press(editor, key)
                    print(repr(key),
                          display(editor),
                          editor.calculated,
                          sep='\t')
            except KeypadError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run the calculator.
        '''
        for line in self.args.expressions:
            result = None
            try:
                for key in line.strip():
                    if not key.isspace():
                        result = press(self.editor, key)
            # Abort entire rest of line, like any calculator showing an error
            except KeypadError as e:
                print(e.args[0], file=sys.stderr)
                continue
            print(result if result is not None else display(self.editor))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _toolbar(self):
        return display(self.editor) or '0'

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    toolbar=self._toolbar)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.editor = Editor()
        self.argument_parser = ArgumentParser(
            description='Keypad calculator',
            epilog='Keys: 0-9, + - * / (also x × ÷), . decimal, ( ) bracket, '
                   '_ sign, < delete, c clear, = equals')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(message)s')
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        self.editor.init()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
