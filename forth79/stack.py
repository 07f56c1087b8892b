# coding= utf-8
from forth79.errors import StackOverflow, StackUnderflow

CELL_BITS = 16
CELL_MIN = -(1 << (CELL_BITS - 1))
CELL_MAX = (1 << (CELL_BITS - 1)) - 1


def to_cell(value):
    """ Wraps an integer to a signed 16-bit cell (two's complement). """
    return ((value - CELL_MIN) & ((1 << CELL_BITS) - 1)) + CELL_MIN


class Stack(object):
    """
    A LIFO of 16-bit cells with an optional capacity (in cells).

    The stack knows nothing about Forth: it refuses to pop what it doesn't
    have (:exc:`StackUnderflow`) and to grow past its capacity
    (:exc:`StackOverflow`). Anything pushed is wrapped to a cell first, so
    arithmetic overflow behaves as it would on a 16-bit machine.
    """
    def __init__(self, capacity=None):
        self.items = []
        self.capacity = capacity

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __str__(self):
        return '[%s]' % ', '.join(str(item) for item in self.items)

    @property
    def is_full(self):
        return self.capacity is not None and len(self.items) >= self.capacity

    def push(self, value):
        if self.is_full:
            raise StackOverflow(value)
        self.items.append(to_cell(value))

    def pop(self):
        if not self.items:
            raise StackUnderflow()
        return self.items.pop()

    def peek(self):
        if not self.items:
            raise StackUnderflow()
        return self.items[-1]

    def remove(self, index):
        """
        Removes and returns the item at `index` (negative indices count from
        the top, as with lists).
        """
        try:
            return self.items.pop(index)
        except IndexError:
            raise StackUnderflow()
