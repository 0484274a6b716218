'''
Infix arithmetic evaluator.

Supports + - * / ^, unary minus, parentheses and decimal literals, all in
double precision. Evaluates while it parses; there's no syntax tree, no
variables and no functions. Not intended to be a programming language!

Beware the precedence, which is not quite what you learned in school:

- ^ folds left to right like everything else, so 2^3^2 is 64. Pass
  flat_power=True (-f) to have it bind like * and /, so 2*3^2 is 36.
- Unary minus negates everything after it, so -2+3 is -5. Pass
  tight_unary=True (or -u on the command line) if you'd rather it didn't.
'''

from .cli import CLI
from .lexer import Lexer, Token, TokenKind
from .parser import Evaluator, evaluate
from .util import InfixError, ParseError


__all__ = ('Evaluator', 'evaluate', 'Lexer', 'Token', 'TokenKind', 'CLI',
           'InfixError', 'ParseError')
