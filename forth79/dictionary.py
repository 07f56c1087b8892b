# coding= utf-8
"""
User-defined words.

A word's body is kept as tokens, not compiled code: references to other words
stay symbolic and are expanded only when the body is compiled, against
whatever the dictionary holds at that time. The exception is redefinition.
Forth binds a word to the definitions that existed when it was compiled, so
before a name is reused every body that mentions it is frozen to its current
meaning (see :meth:`Dictionary.define`).
"""
from forth79.errors import InvalidWord
from forth79.parser import DEFINE, END_DEFINE, parse_number

import logging

log = logging.getLogger(__name__)


def flatten(words):
    """
    Returns a copy of `words` in which every token naming a word is replaced by
    that word's body. Only one level is substituted, always from the original
    mapping, so the result does not depend on iteration order.
    """
    flat = {}
    for name, body in words.items():
        tokens = []
        for token in body:
            if token in words:
                tokens.extend(words[token])
            else:
                tokens.append(token)
        flat[name] = tokens
    return flat


class Dictionary(object):
    def __init__(self):
        self.words = {}
        self._recursive = {}

    def __contains__(self, name):
        return name in self.words

    def __getitem__(self, name):
        return self.words[name]

    def __len__(self):
        return len(self.words)

    def is_recursive(self, name):
        """
        True if expanding `name` would never end, because some word it leads
        to (directly or through other words) leads back to itself, as with
        `: A B ;` `: B A ;`. Answers are cached until the next definition.
        """
        if name not in self._recursive:
            self._recursive[name] = self._reaches_cycle(name)
        return self._recursive[name]

    def _reaches_cycle(self, name):
        # Depth-first walk over word references; a word met again while
        # still on the path closes a cycle.
        on_path = {name}
        done = set()
        path = [(name, iter(self.words[name]))]
        while path:
            word, tokens = path[-1]
            for token in tokens:
                if token not in self.words or token in done:
                    continue
                if token in on_path:
                    return True
                on_path.add(token)
                path.append((token, iter(self.words[token])))
                break
            else:
                path.pop()
                on_path.discard(word)
                done.add(word)
        return False

    def define(self, tokens):
        """
        Processes a complete definition, `[':', name, body..., ';']`.

        Redefining an existing name first flattens the whole dictionary, so
        words that called the old definition keep doing so. A body that
        mentions its own name gets the previous definition spliced in, which
        lets `: FOO FOO 1 + ;` extend FOO instead of recursing forever.
        """
        if len(tokens) < 3 or tokens[0] != DEFINE or tokens[-1] != END_DEFINE:
            raise InvalidWord(' '.join(tokens))
        name, body = tokens[1], tokens[2:-1]
        if parse_number(name) is not None:
            raise InvalidWord(name)

        if name in self.words:
            log.debug('redefining %s', name)
            self.words = flatten(self.words)

        previous = self.words.get(name, [])
        new_body = []
        for token in body:
            if token == name:
                new_body.extend(previous)
            else:
                new_body.append(token)
        self.words[name] = new_body
        self._recursive = {}
