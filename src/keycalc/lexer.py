from functools import reduce
import operator

import regex

from .util import CalculationError
from .equation import OPERATORS


class Lexer:
    '''
    Lexer for joined equation text, as in 12 * ( 3 + (-4.5) ).

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Number, as typed or as carried over from a formatted result.
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 12. (notice trailing dot), 12.5
                      \d+
                      (?:
                          \.
                          \d*
                      )?
                  )|(?:
                      # .5
                      \.
                      \d+
                  )
              )
              (?:
                  # 1.2346E10, 1.2346E-5
                  [Ee]
                  [-+]?
                  \d+
              )?
              '''
    # Negative number, always wrapped: (-12), (-0.5)
    NEGATIVE = r'''
                \(
                \-
                (?<magnitude>
                    {NUMBER}
                )
                \)
                '''.format(NUMBER=NUMBER)

    assert not [operator
                for operator
                in OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    BRACKET = r'[()]'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<negative>' + NEGATIVE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<bracket>' + BRACKET + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises on the first bad one.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalculationError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme means anything to the parser.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return lexeme matches.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def lexemes(self, line):
        '''
        Yield matched groups of every meaningful lexeme.
        '''
        for match in self.lex(line):
            if self.isfeedable(match):
                yield self.matchedgroups(match)
