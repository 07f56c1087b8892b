# coding= utf-8
"""
Implements a Forth-79 machine, i.e., an object capable of maintaining a stack
and a dictionary of words and responding to valid (and invalid) Forth code fed
to it one line at a time.

Usage should be as simple as:
    >>> import sys, forth79
    >>> m = forth79.Machine()
    >>> ok = m.interpret_line('1 2 +', sys.stdout)
    >>> m.get_stack_state()
    [3]

The Forth machine may also be given strings to evaluate:
    >>> forth79.Machine().eval('5 4 + . cr')
    '9\\n'

Wherein the return value is whatever the machine printed. Errors are printed
too, as a short fixed message ("stack-underflow", "?", ...) followed by a
newline, and stop the rest of the offending line.

Only a small subset of the language is supported: 16-bit integer arithmetic,
the usual stack words, comparisons and logic, `.`, `EMIT`, `CR`, `."`, word
definitions with `: ... ;` (possibly over several lines) and IF/ELSE/THEN.
"""
from forth79.errors import *
from forth79.machine import Machine, TRUE, FALSE
from forth79.parser import Parser, LineBuffer, tokenize
from forth79.stack import Stack

__version__ = '1.0.0'
