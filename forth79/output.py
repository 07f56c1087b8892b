# coding= utf-8
import logging

log = logging.getLogger(__name__)

NEWLINE = '\n'


class Output(object):
    """
    Collects the fragments a line prints (numbers, characters, literal
    strings, newlines and error messages) and writes them out in one go.

    Fragments are separated by a single space, except that no space is ever
    written before a newline nor at the start of a fresh line. Whether the
    next fragment needs a space is remembered between flushes in
    `pending_space`, so output spread over several input lines reads as if it
    came from one (`." hello"`, `cr`, `." world"` gives "hello\\nworld").
    """
    def __init__(self):
        self.fragments = []
        self.pending_space = False

    def append(self, fragment):
        self.fragments.append(fragment)

    def flush(self, destination):
        """
        Writes every pending fragment to `destination` (anything with a
        `write(str)` method) and clears them. A failing write abandons the
        rest of this flush only.
        """
        if not self.fragments:
            return

        spaced = self.pending_space
        try:
            for fragment in self.fragments:
                if spaced and fragment != NEWLINE:
                    destination.write(' ' + fragment)
                else:
                    destination.write(fragment)
                spaced = fragment != NEWLINE
        except OSError as e:
            log.error('error while writing output: %s', e)
        finally:
            self.pending_space = self.fragments[-1] != NEWLINE
            self.fragments = []
