# coding= utf-8
"""
Errors a :class:`forth79.Machine` reports in place of a line's output.

Each kind carries the fixed message written to the output stream. The
argument given when raising (usually the offending token) is only kept for
logging; it never changes what the user sees.
"""


class ForthError(Exception):
    message = 'error'

    def __init__(self, detail=None):
        super(ForthError, self).__init__(detail if detail is not None else self.message)


class StackUnderflow(ForthError):
    message = 'stack-underflow'


class StackOverflow(ForthError):
    message = 'stack-overflow'


class DivisionByZero(ForthError):
    message = 'division-by-zero'


class InvalidWord(ForthError):
    message = 'invalid-word'


class UnknownWord(ForthError):
    message = '?'


class UnterminatedString(ForthError):
    message = 'unterminated-string'


class RecursiveWord(ForthError):
    message = 'recursive-word'
