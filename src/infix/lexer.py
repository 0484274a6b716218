from enum import Enum
from functools import reduce
from typing import NamedTuple
import operator

import regex

from .util import InfixError


class TokenKind(Enum):
    PLUS = '+'
    MINUS = '-'
    MULT = '*'
    DIV = '/'
    POW = '^'
    NUMBER = 'number'
    LPAREN = '('
    RPAREN = ')'
    END = 'end'
    UNKNOWN = 'unknown'


class Token(NamedTuple):
    '''
    Classified lexeme.

    value is only meaningful for NUMBER tokens. offset is where the lexeme
    starts in the original text.
    '''
    kind: TokenKind
    value: float = 0.0
    lexeme: str = ''
    offset: int = 0


class Lexer:
    '''
    Lexer for the infix arithmetic *regular* grammar.

    Pulls one token at a time off the front of the text, on demand. Keeps the
    last token around so the parser can look one token ahead.
    '''
    # Number literal. No sign; that's the parser's job (unary minus).
    NUMBER = r'''
              # 1, 12, 1. (notice trailing dot), 1.25
              [0-9]+
              (?:
                  \.
                  [0-9]*
              )?
              '''
    # Single character lexemes, dispatched on directly.
    SYMBOLS = {
        kind.value: kind
        for kind
        in TokenKind
        if len(kind.value) == 1
    }
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, text):
        '''
        Create lexer over text. Doesn't consume anything yet.
        '''
        self.text = text
        self.remaining = text
        self.previous = None
        self.replay = False

    @property
    def offset(self):
        '''
        How much of the original text has been consumed.
        '''
        return len(self.text) - len(self.remaining)

    def next_token(self):
        '''
        Consume and return the next token.

        Replays the previous token instead if revert()ed. An unknown lexeme
        discards all remaining input, so every pull after it is END.
        '''
        if self.replay:
            self.replay = False
            return self.previous
        self.remaining = self.remaining.lstrip()
        token = self._scan()
        if token.kind is TokenKind.UNKNOWN:
            # No resynchronizing.
            self.remaining = ''
        self.previous = token
        return token

    def revert(self):
        '''
        Make the next pull replay the last token.

        Only one token of history: reverting twice still replays it once.
        '''
        if self.previous is None:
            raise InfixError('Nothing to revert')
        self.replay = True

    def peek(self):
        '''
        Return the next token without consuming it.
        '''
        token = self.next_token()
        self.revert()
        return token

    def __iter__(self):
        '''
        Yield tokens up to and including END or UNKNOWN.
        '''
        while True:
            token = self.next_token()
            yield token
            if token.kind in (TokenKind.END, TokenKind.UNKNOWN):
                return

    def _scan(self):
        offset = self.offset
        if not self.remaining:
            return Token(TokenKind.END, offset=offset)
        kind = type(self).SYMBOLS.get(self.remaining[0])
        if kind is not None:
            lexeme, self.remaining = self.remaining[0], self.remaining[1:]
            return Token(kind, lexeme=lexeme, offset=offset)
        match = regex.match(type(self).NUMBER, self.remaining,
                            flags=type(self).FLAGS)
        if match is not None:
            lexeme = match.group(0)
            self.remaining = self.remaining[len(lexeme):]
            return Token(TokenKind.NUMBER, float(lexeme), lexeme, offset)
        return Token(TokenKind.UNKNOWN, lexeme=self.remaining, offset=offset)
