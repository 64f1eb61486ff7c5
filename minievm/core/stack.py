"""LIFO stack of 256-bit words with underflow detection."""

from typing import Iterable, List, Optional

from .errors import StackUnderflow
from .word import is_word


class Stack:
    """
    Word stack; the top is the last element of the backing list.

    Only ``push`` and ``pop_n`` (and its ``pop`` shorthand) mutate the stack.
    """

    def __init__(self, items: Optional[Iterable[int]] = None):
        self._items: List[int] = []
        for item in items or []:
            self.push(item)

    def push(self, word: int) -> None:
        if not is_word(word):
            raise ValueError(f"Value is not a 256-bit word: {word!r}")
        self._items.append(word)

    def pop_n(self, n: int) -> List[int]:
        """
        Remove and return the ``n`` most recently pushed words.

        Args:
            n: Number of words to pop

        Returns:
            The popped words, most recent first

        Raises:
            StackUnderflow: If fewer than ``n`` words are present. The stack
                is left untouched in that case.
        """
        if n < 0:
            raise ValueError(f"Cannot pop a negative number of words: {n}")
        if len(self._items) < n:
            raise StackUnderflow(required=n, available=len(self._items))
        if n == 0:
            return []
        popped = self._items[-n:]
        del self._items[-n:]
        popped.reverse()
        return popped

    def pop(self) -> int:
        return self.pop_n(1)[0]

    def peek(self, depth: int = 0) -> int:
        """Return the word ``depth`` positions below the top without removing it."""
        if depth < 0 or depth >= len(self._items):
            raise StackUnderflow(required=depth + 1, available=len(self._items))
        return self._items[-1 - depth]

    def to_list(self) -> List[int]:
        """Copy of the contents, oldest first and top last."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Stack({[hex(w) for w in self._items]})"
