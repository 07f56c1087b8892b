# coding= utf-8
from forth79.dictionary import Dictionary
from forth79.errors import (
    DivisionByZero,
    ForthError,
    RecursiveWord,
    StackUnderflow,
    UnknownWord,
)
from forth79.output import NEWLINE, Output
from forth79.parser import DEFINE, PRINT_STRING, QUOTE, LineBuffer, parse_number, tokenize
from forth79.stack import Stack

import inspect
import io
import logging
import types

log = logging.getLogger(__name__)

TRUE = -1
FALSE = 0

IF = 'IF'
ELSE = 'ELSE'
THEN = 'THEN'


def _word(name):
    """
    Creates a decorator that adds a .word member to its given func, which may
    then be inspected for by the :class:`Machine`'s __init__ method. Note that
    if you already have an instance of :class:`Machine`, it's too late to
    decorate and you should call its :meth:`Machine.add_stackmethod`
    instead.
    """
    def decorator(func):
        func.word = name
        return func
    return decorator


def _flag(condition):
    return TRUE if condition else FALSE


def _divide(b, a):
    """ Integer division truncating toward zero, as Forth-79 specifies. """
    if b == 0:
        raise DivisionByZero()
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        return -quotient
    return quotient


def _string_literal(token):
    text = token[len(PRINT_STRING):]
    if text.endswith(QUOTE):
        text = text[:-1]
    return text.strip()


def _close_branch(branch, ops):
    """
    Finishes an open IF whose last list is `ops`, appends the branch to the
    enclosing list and returns that list.
    """
    outer, true_ops = branch
    if true_ops is None:
        true_ops, false_ops = ops, []
    else:
        false_ops = ops
    outer.append(('BRANCH', (true_ops, false_ops)))
    return outer


class Machine(object):
    """
    A Forth machine: a data stack, a dictionary of user words and an output
    buffer, fed one line of text at a time through :meth:`interpret_line`.

    Lines are tokenized, then either stored as a definition or compiled into a
    list of operations and run. Operations are `(kind, value)` tuples:

        ('NUMBER', n)                       push n
        ('CALL', method)                    run a built-in word
        ('PRINT', text)                     print text
        ('BRANCH', (true_ops, false_ops))   pop a flag and run one of two lists
        ('WORD', token)                     a token nobody knows about

    Errors stop the current line only: whatever ran before the failure stays
    done, the error message is printed, and the next line starts afresh.
    """
    def __init__(self):
        self.stack = Stack()
        self.dictionary = Dictionary()
        self.line_buffer = LineBuffer()
        self.output = Output()
        self.primitives = {}

        # Add decorated member words
        for name, method in inspect.getmembers(self, inspect.ismethod):
            if hasattr(method, 'word'):
                self.primitives[method.word] = method

        # Add basic math, comparison and stack handling
        self.add_stackmethod('+', lambda b, a: a + b)
        self.add_stackmethod('-', lambda b, a: a - b)
        self.add_stackmethod('*', lambda b, a: a * b)
        self.add_stackmethod('/', _divide)
        self.add_stackmethod('SWAP', lambda b, a: (b, a))
        self.add_stackmethod('OVER', lambda b, a: (a, b, a))
        self.add_stackmethod('DROP', lambda a: None)
        self.add_stackmethod('=', lambda b, a: _flag(a == b))
        self.add_stackmethod('<', lambda b, a: _flag(a < b))
        self.add_stackmethod('>', lambda b, a: _flag(a > b))
        self.add_stackmethod('AND', lambda b, a: a & b)
        self.add_stackmethod('OR', lambda b, a: a | b)
        self.add_stackmethod('NOT', lambda a: _flag(a == 0))

    def set_stack_size(self, size):
        """ Limits the stack to `size` bytes, i.e. `size // 2` cells. """
        self.stack.capacity = size // 2

    def get_stack_state(self):
        return list(self.stack)

    def get_stack_output(self):
        return ' '.join(str(item) for item in self.stack)

    @_word('.')
    def _stack_pop(self):
        self.output.append(str(self.stack.pop()))

    @_word('EMIT')
    def _emit(self):
        value = self.stack.pop()
        self.output.append(chr(value & 0xFF))

    @_word('CR')
    def _carriage_return(self):
        self.output.append(NEWLINE)

    @_word('DUP')
    def _dup(self):
        self.stack.push(self.stack.peek())

    @_word('ROT')
    def _rot(self):
        if len(self.stack) < 3:
            raise StackUnderflow()
        self.stack.push(self.stack.remove(-3))

    def add_stackmethod(self, word, func):
        """
        Turns a given function `func` into a stack-consumer.

        The function will get its arguments from the stack automatically, in
        the order they pop off (so from the stack [1, 2] the call to a
        two-argument function will be func(2, 1). The function's return value
        (or values) are assumed to go back on the stack.

        Arguments are popped one at a time, so a stack-consumer that underflows
        has still used up whatever it managed to pop.
        """
        num_args = func.__code__.co_argcount

        def stack_helper(self):
            args = [self.stack.pop() for x in range(num_args)]
            ret = func(*args)
            if ret is None:
                return
            if isinstance(ret, tuple):
                for value in ret:
                    self.stack.push(value)
            else:
                self.stack.push(ret)
        self.primitives[word] = types.MethodType(stack_helper, self)

    def interpret_line(self, line, destination):
        """
        Feeds one line of text to the machine, writing whatever it prints to
        `destination`. Returns False if the line failed with an error (the
        error message is printed in place of the rest of its output).

        Lines belonging to an unfinished definition are only buffered, and
        count as a success.
        """
        ok = True
        try:
            if self.line_buffer.absorb(line):
                tokens = self.line_buffer.complete()
                if tokens is None:
                    return True
            else:
                tokens = tokenize(line)
            self.run(tokens)
        except ForthError as e:
            log.debug('%r failed: %s (%s)', line, e.message, e)
            self.output.append(e.message + NEWLINE)
            ok = False
        self.output.flush(destination)
        return ok

    def eval(self, text=''):
        """ Interprets every line of `text`, returning what got printed. """
        destination = io.StringIO()
        for line in text.split('\n'):
            if not self.interpret_line(line, destination):
                break
        return destination.getvalue()

    def run(self, tokens):
        if not tokens:
            return
        if tokens[0] == DEFINE:
            self.dictionary.define(tokens)
            return
        self.interpret(self.compile(tokens))

    def compile(self, tokens):
        """
        Compiles a list of tokens into a list of operations, expanding user
        words and turning IF ... ELSE ... THEN into branches.

        User words are expanded in place, so the expansion is compiled (and
        expanded further) by this same loop. Open branches are kept on an
        explicit stack, so nesting depth is only limited by memory. An IF
        left without its THEN is closed at the end of the tokens.
        """
        tokens = list(tokens)
        ops = []
        # One [enclosing ops, true_ops] pair per open IF; true_ops is None
        # until the IF's ELSE is seen.
        branches = []
        pos = 0
        while pos < len(tokens):
            word = tokens[pos]
            if word in self.dictionary:
                if self.dictionary.is_recursive(word):
                    raise RecursiveWord(word)
                tokens[pos:pos + 1] = self.dictionary[word]
                continue

            kind, token = self.tokenize_one(word)
            pos += 1
            if kind == IF:
                branches.append([ops, None])
                ops = []
            elif kind == ELSE and branches and branches[-1][1] is None:
                branches[-1][1] = ops
                ops = []
            elif kind == THEN and branches:
                ops = _close_branch(branches.pop(), ops)
            elif kind in (ELSE, THEN):
                ops.append(('WORD', word))
            else:
                ops.append((kind, token))

        while branches:
            ops = _close_branch(branches.pop(), ops)
        return ops

    def tokenize_one(self, word):
        if word in self.primitives:
            return 'CALL', self.primitives[word]
        if word in (IF, ELSE, THEN):
            return word, None

        number = parse_number(word)
        if number is not None:
            return 'NUMBER', number
        if word.startswith(PRINT_STRING):
            return 'PRINT', _string_literal(word)
        return 'WORD', word

    def interpret(self, ops=()):
        """
        Runs a list of operations. Branches are followed with an explicit
        stack of iterators rather than by recursion.
        """
        frames = [iter(ops)]
        while frames:
            for kind, token in frames[-1]:
                if kind == 'BRANCH':
                    frames.append(iter(self._take_branch(*token)))
                    break
                self.interpret_one(kind, token)
            else:
                frames.pop()

    def _take_branch(self, true_ops, false_ops):
        if self.stack.pop():
            return true_ops
        return false_ops

    def interpret_branch(self, true_ops, false_ops):
        self.interpret(self._take_branch(true_ops, false_ops))

    def interpret_one(self, kind, token):
        if kind == 'NUMBER':
            self.stack.push(token)
        elif kind == 'CALL':
            token()
        elif kind == 'PRINT':
            self.output.append(token)
        elif kind == 'BRANCH':
            self.interpret_branch(*token)
        elif kind == 'WORD':
            raise UnknownWord(token)
        else:
            raise ForthError('unknown token type: %s' % kind)
