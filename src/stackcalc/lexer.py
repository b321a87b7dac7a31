import sys
from functools import reduce
import operator

import regex

from .opcodes import EXTENDED, Op, Opcode
from .util import UnknownToken


class Lexer:
    '''
    Lexer for the stack machine's *regular* token grammar.

    A token is either ``ldc:<float>`` or one of the opcode keywords. The
    keyword table is fixed at construction, so a base lexer doesn't know the
    comparison and stack words.
    '''
    # Float literal, as accepted after ldc:.
    # Stricter than float(): no underscores, no whitespace, no hex.
    FLOAT = r'''
             [+-]?
             (?:
                 (?:
                     # 1, 1., 1.5
                     \d+
                     (?:
                         \.
                         \d*
                     )?
                     |
                     # .5
                     \.
                     \d+
                 )
                 (?:
                     [eE]
                     [+-]?
                     \d+
                 )?
                 |
                 (?i:
                     inf(?:inity)?
                     |
                     nan
                 )
             )
             '''
    # Push literal. The value group must also fullmatch FLOAT.
    LDC = r'ldc:(?<value>.*)'
    # Unicode White_Space, which excludes the \x1c-\x1f separators
    # str.split() would also split on.
    SPACE = r'\p{White_Space}+'
    # Default regex flags for matching tokens. ASCII keeps \d to 0-9.
    FLAGS = reduce(operator.__or__,
                   {regex.ASCII,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, opcodes=EXTENDED, strict=False, verbose=False):
        '''
        :param opcodes: Set of ``Op`` kinds this lexer recognises.
        :param strict: Raise on tokens that aren't opcodes rather than
                       dropping them.
        :param verbose: Report dropped tokens on stderr.
        '''
        self.opcodes = frozenset(opcodes)
        self.strict = strict
        self.verbose = verbose
        self.keywords = {op.value: op
                         for op
                         in self.opcodes
                         if op is not Op.LDC}
        keyword = r'|'.join(map(regex.escape, sorted(self.keywords)))
        self.TOKEN = r'(?<keyword>' + (keyword or r'(?!)') + r')'
        if Op.LDC in self.opcodes:
            self.TOKEN = r'(?<ldc>' + type(self).LDC + r')|' + self.TOKEN
        self._token = regex.compile(self.TOKEN, flags=type(self).FLAGS)
        self._float = regex.compile(type(self).FLOAT,
                                    flags=type(self).FLAGS)

    def split(self, line):
        '''
        Split a line into whitespace-delimited tokens.
        '''
        return [token
                for token
                in regex.split(type(self).SPACE, line)
                if token]

    def match(self, token):
        '''
        Return the match of a whole token against the grammar, or None.
        '''
        match = self._token.fullmatch(token)
        if match is None:
            return None
        if 'ldc' in self.matchedgroups(match):
            if self._float.fullmatch(match.group('value')) is None:
                return None
        return match

    def parse(self, token):
        '''
        Turn one token into an Opcode, or None if it isn't one.

        Never raises, whatever the lexer's strictness.
        '''
        match = self.match(token)
        if match is None:
            return None
        groups = self.matchedgroups(match)
        if 'keyword' in groups:
            return Opcode(self.keywords[groups['keyword']])
        return Opcode(Op.LDC, float(match.group('value')))

    def lex(self, line):
        '''
        Take a line and yield the match of every token that is an opcode.

        Tokens that aren't opcodes are skipped, or raise UnknownToken if
        strict.
        '''
        for token in self.split(line):
            match = self.match(token)
            if match is not None:
                yield match
            elif self.strict:
                raise UnknownToken('Unknown token {}'.format(token))
            elif self.verbose:
                print('Dropped token', token, file=sys.stderr)

    def tokens(self, line):
        '''
        Return the opcodes of a whole line, in order.

        The line is fully lexed before anything runs; a bad token in strict
        mode means none of the line runs.
        '''
        return [self.parse(match.group(0)) for match in self.lex(line)]

    def matchedgroups(self, match):
        '''
        Return the named groups that took part in the match.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value is not None and key != 'value'}
