# coding= utf-8
from forth79.errors import UnterminatedString
from forth79.stack import CELL_MAX, CELL_MIN

import re

DEFINE = ':'
END_DEFINE = ';'
PRINT_STRING = '."'
QUOTE = '"'

NUMBER = re.compile(r'[+-]?[0-9]+\Z')


def parse_number(word):
    """
    Returns the value of `word` if it is a literal that fits in a cell, or None
    if it isn't (so that `99999` is a perfectly good word name).
    """
    if NUMBER.match(word) is None:
        return None
    value = int(word)
    if CELL_MIN <= value <= CELL_MAX:
        return value
    return None


class Parser(object):
    """
    Very simple Forth parser -- not much more than a few primitives useful for
    consuming an input line in a Forth-compatible way.

    The parser is stateful, in as much as each instance thereof is given an
    initial string to operate on, and calls to parse_whatever will advance the
    parser's position within that string, if necessary (thus, the next call
    will start from where the previous left off).

    Words are separated by single spaces; runs of spaces simply produce no
    words. Every word comes out upper-cased, except for print literals: a `."`
    word swallows the words following it, verbatim and with their spacing,
    until one ends with a double quote, and the whole lot comes out as one
    token (`." Hello   World"`).

    The parse_* methods will usually raise :exc:`StopIteration` when the string
    has been completely consumed; at that point, the current :class:`Parser`
    instance may be thrown away and a fresh one made for the next line.
    """
    def __init__(self, text):
        self.text = text
        self.pos = 0

    @property
    def is_finished(self):
        return self.pos >= len(self.text)

    def _consume(self, pattern):
        """
        Consume (advancing self.pos) some characters based on a regex. The
        regex is applied to a slice of self.text starting from self.pos and
        ending at the end of the string.

        Note that matches are only ever expected at the start of the string
        slice.
        """
        if self.is_finished:
            raise StopIteration()
        found = re.match(pattern, self.text[self.pos:])
        if found is None:
            return None
        self.pos += found.end()
        return found.group()

    def parse_spaces(self):
        return self._consume(r' *')

    def parse_word(self):
        return self._consume(r'[^ ]+')

    def parse_string(self):
        """
        Consumes the rest of a print literal, i.e. everything up to and
        including the first word that ends with a double quote. The spaces
        between words are kept as they were.
        """
        parts = []
        while True:
            if self.is_finished:
                raise UnterminatedString(self.text)
            part = self._consume(r' [^ ]*')
            parts.append(part)
            if part.endswith(QUOTE):
                return ''.join(parts)

    def next_word(self):
        self.parse_spaces()
        return self.parse_word()

    def next_token(self):
        word = self.next_word()
        if word == PRINT_STRING:
            return word + self.parse_string()
        return word.upper()

    def generate(self):
        while True:
            try:
                token = self.next_token()
            except StopIteration:
                return
            yield token


def tokenize(text):
    return list(Parser(text).generate())


class LineBuffer(object):
    """
    Holds the text of a word definition that spans several input lines.

    A line whose first word is `:` opens a definition; from then on every line
    is appended (space separated) until the buffered text ends with a `;`
    token, at which point :meth:`complete` hands back the whole definition's
    tokens and the buffer is emptied.
    """
    def __init__(self):
        self.text = ''

    @property
    def is_open(self):
        return bool(self.text)

    def absorb(self, line):
        """ Returns True if `line` became (part of) a buffered definition. """
        if self.is_open:
            self.text += ' ' + line
            return True
        try:
            first = Parser(line).next_word()
        except StopIteration:
            return False
        if first == DEFINE:
            self.text = line
            return True
        return False

    def complete(self):
        """
        Returns the buffered definition's tokens if it is finished (and clears
        the buffer), or None if more lines are needed.
        """
        try:
            tokens = tokenize(self.text)
        except UnterminatedString:
            return None
        if not tokens or tokens[-1] != END_DEFINE:
            return None
        self.text = ''
        return tokens
