import operator
import sys

from .lexer import Lexer, TokenKind
from .util import InfixError, ParseError, divide, power


class Evaluator:
    '''
    Recursive descent evaluator for infix arithmetic.

    Computes the value while parsing; no syntax tree. One instance, one
    parse().
    '''

    GRAMMAR = '''\
expression     := factor (('+' | '-') factor)*
factor         := exponentiation (('*' | '/') exponentiation)*
exponentiation := number ('^' number)*
number         := NUMBER
                | '(' expression ')'
                | '-' expression'''

    # Binary operators, by token. Every tier folds left to right, ^ included:
    # 2^3^2 is 64.
    OPERATORS = {
        TokenKind.PLUS: operator.__add__,
        TokenKind.MINUS: operator.__sub__,
        TokenKind.MULT: operator.__mul__,
        TokenKind.DIV: divide,
        TokenKind.POW: power,
    }

    # Enough frames for about two thousand levels of nesting.
    RECURSION_LIMIT = 10000

    def __init__(self, text, tight_unary=False, flat_power=False):
        '''
        Create evaluator over text. Does not parse yet.

        :param tight_unary: Unary minus negates the next number or group only,
                            rather than the whole expression following it.
        :param flat_power: ^ shares precedence with * and /, so 2*3^2 is 36.
        '''
        self.text = text
        self.lexer = Lexer(text)
        self.tight_unary = tight_unary
        self.expression_operators = TokenKind.PLUS, TokenKind.MINUS
        if flat_power:
            self.factor_operators = (TokenKind.MULT, TokenKind.DIV,
                                     TokenKind.POW)
            self.exponentiation_operators = ()
        else:
            self.factor_operators = TokenKind.MULT, TokenKind.DIV
            self.exponentiation_operators = TokenKind.POW,
        self.token = None
        self.result = None
        self.error = None
        self.parsed = False

    def original_text(self):
        return self.text

    def has_error(self):
        return self.error is not None

    def value(self):
        '''
        Return the computed value.

        Raises unless parse() succeeded.
        '''
        if not self.parsed:
            raise InfixError('{0!r} not parsed yet'.format(self.text))
        if self.error is not None:
            raise InfixError('Couldn\'t evaluate {0!r}'.format(self.text),
                             self.error)
        return self.result

    def parse(self):
        '''
        Parse the whole text and save the result, or the error.
        '''
        if self.parsed:
            raise InfixError('{0!r} already parsed'.format(self.text))
        self.parsed = True
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, type(self).RECURSION_LIMIT))
        try:
            result = self.expression()
            self._expect(TokenKind.END, 'Expected end of input')
        except ParseError as e:
            self.error = e
        except RecursionError:
            self.error = ParseError('Expression nested too deeply',
                                    self.lexer.offset)
        else:
            self.result = result
        finally:
            sys.setrecursionlimit(limit)

    # Fold loops are written out in each rule. Each level of nesting costs
    # one frame per rule.

    def expression(self):
        '''
        Sum of factors.
        '''
        total = self.factor()
        while self.lexer.peek().kind in self.expression_operators:
            self.token = self.lexer.next_token()
            total = type(self).OPERATORS[self.token.kind](total, self.factor())
        return total

    def factor(self):
        '''
        Product or quotient of powers.
        '''
        product = self.exponentiation()
        while self.lexer.peek().kind in self.factor_operators:
            self.token = self.lexer.next_token()
            product = type(self).OPERATORS[self.token.kind](
                product, self.exponentiation())
        return product

    def exponentiation(self):
        base = self.number()
        while self.lexer.peek().kind in self.exponentiation_operators:
            self.token = self.lexer.next_token()
            base = type(self).OPERATORS[self.token.kind](base, self.number())
        return base

    def number(self):
        '''
        Number literal, parenthesized expression, or negation.
        '''
        token = self.token = self.lexer.next_token()
        if token.kind is TokenKind.NUMBER:
            return token.value
        elif token.kind is TokenKind.LPAREN:
            value = self.expression()
            self._expect(TokenKind.RPAREN, 'Expected \')\'')
            return value
        elif token.kind is TokenKind.MINUS:
            # Loosely bound by default: -2+3 is -(2+3).
            if self.tight_unary:
                return -self.number()
            return -self.expression()
        raise self._unexpected(token, 'Expected number, \'(\' or \'-\'')

    def _expect(self, kind, message):
        token = self.token = self.lexer.next_token()
        if token.kind is not kind:
            raise self._unexpected(token, message)
        return token

    def _unexpected(self, token, message):
        if token.kind is TokenKind.UNKNOWN:
            return ParseError('Couldn\'t lex {0!r}'.format(token.lexeme),
                              token.offset)
        elif token.kind is TokenKind.END:
            found = 'end of input'
        else:
            found = repr(token.lexeme)
        return ParseError('{0} but found {1}'.format(message, found),
                          token.offset)


def evaluate(text, **options):
    '''
    Evaluate text and return its value, raising ParseError if malformed.

    :param options: Passed on to Evaluator.
    '''
    evaluator = Evaluator(text, **options)
    evaluator.parse()
    if evaluator.has_error():
        raise evaluator.error
    return evaluator.value()
