import math


class InfixError(Exception):
    pass


class ParseError(InfixError):
    '''
    Malformed expression.

    Carries the offset into the original text where evaluation gave up.
    '''
    def __init__(self, message, offset=0):
        super().__init__(message, offset)
        self.message = message
        self.offset = offset

    def __str__(self):
        return '{0} at {1}'.format(self.message, self.offset)

    def diagnose(self, text):
        '''
        Return text with a caret under the offending position.
        '''
        return '{0}\n{1}^'.format(text, ' ' * min(self.offset, len(text)))


def _isoddinteger(n):
    return n.is_integer() and n % 2 == 1


def divide(left, right):
    '''
    IEEE-754 division. Python raises on zero divisors; C doesn't.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        # Signed zeros matter: 1/-0 is -inf.
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def power(base, exponent):
    '''
    IEEE-754 pow(), as C's libm does it.

    math.pow raises where C returns inf or nan, and ** even goes complex on
    negative bases with fractional exponents.
    '''
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _isoddinteger(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # Only negative exponents get here: 0^-n is a pole.
            if _isoddinteger(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base, fractional exponent.
        return math.nan
