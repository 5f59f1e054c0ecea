"""Linked symbol sequence used by the rewriter and the interpreter.

Elements live in a per-sequence arena and are addressed by integer
handles. Handles are drawn from a process-wide counter and never reused,
so a handle that has been removed (or that belongs to another sequence)
raises ``KeyError`` instead of silently aliasing a different element.

Every node links both forward and backward. ``head`` and ``tail`` are
handles (``None`` when the sequence is empty) and every structural
mutation goes through ``_link_after`` / ``_unlink``, which are the only
places that move them.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")

Handle = int

_handles = itertools.count()


class _Node(Generic[T]):
    __slots__ = ("value", "next", "prev")

    def __init__(self, value: T) -> None:
        self.value = value
        self.next: Handle | None = None
        self.prev: Handle | None = None


class Sequence(Generic[T]):
    """Ordered, mutable collection with in-place splicing."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._nodes: dict[Handle, _Node[T]] = {}
        self._head: Handle | None = None
        self._tail: Handle | None = None
        for v in values:
            self.append(v)

    # -------------------------
    # Structure
    # -------------------------

    @property
    def head(self) -> Handle | None:
        return self._head

    @property
    def tail(self) -> Handle | None:
        return self._tail

    def _link_after(self, anchor: Handle | None, value: T) -> Handle:
        """Create a node holding ``value`` right after ``anchor``.

        ``anchor=None`` links at the front.
        """
        h = next(_handles)
        node: _Node[T] = _Node(value)
        if anchor is None:
            node.next = self._head
            self._head = h
        else:
            prev = self._nodes[anchor]
            node.prev = anchor
            node.next = prev.next
            prev.next = h

        if node.next is None:
            self._tail = h
        else:
            self._nodes[node.next].prev = h

        self._nodes[h] = node
        return h

    def _unlink(self, h: Handle) -> T:
        node = self._nodes.pop(h)
        if node.prev is None:
            self._head = node.next
        else:
            self._nodes[node.prev].next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            self._nodes[node.next].prev = node.prev
        return node.value

    # -------------------------
    # Operations
    # -------------------------

    def append(self, value: T) -> Handle:
        return self._link_after(self._tail, value)

    def push_after(self, h: Handle, value: T) -> Handle:
        """Insert a single value immediately after element ``h``."""
        if h not in self._nodes:
            raise KeyError(h)
        return self._link_after(h, value)

    def remove_front(self) -> T | None:
        if self._head is None:
            return None
        return self._unlink(self._head)

    def remove_back(self) -> T | None:
        if self._tail is None:
            return None
        return self._unlink(self._tail)

    def remove(self, h: Handle) -> T:
        return self._unlink(h)

    def insert_after(self, h: Handle, donor: Sequence[T]) -> Handle:
        """Move every element of ``donor`` in after ``h``.

        Returns the handle of the last element inserted, or ``h`` itself
        when the donor was empty. The donor is left empty.
        """
        if donor is self:
            raise ValueError("cannot insert a sequence into itself")
        if h not in self._nodes:
            raise KeyError(h)
        anchor = h
        for value in donor.drain():
            anchor = self._link_after(anchor, value)
        return anchor

    def splice_replace(self, h: Handle, donor: Sequence[T]) -> Handle | None:
        """Replace element ``h`` by the whole of ``donor``.

        ``h`` keeps its handle and takes the donor's first value; the rest
        of the donor is welded in after it, ahead of whatever followed
        ``h`` before. An empty donor drops ``h`` from the sequence.

        Returns the handle of the last element of the spliced run, or
        ``None`` if ``h`` was dropped. The donor is left empty.
        """
        if donor is self:
            raise ValueError("cannot splice a sequence into itself")
        node = self._nodes[h]
        if donor._head is None:
            self._unlink(h)
            return None
        node.value = donor._unlink(donor._head)
        return self.insert_after(h, donor)

    def drain(self) -> Iterator[T]:
        """Yield and remove values from the front until empty."""
        while self._head is not None:
            yield self._unlink(self._head)

    # -------------------------
    # Access / iteration
    # -------------------------

    def __getitem__(self, h: Handle) -> T:
        return self._nodes[h].value

    def __setitem__(self, h: Handle, value: T) -> None:
        self._nodes[h].value = value

    def __contains__(self, h: object) -> bool:
        return h in self._nodes

    def next_of(self, h: Handle) -> Handle | None:
        return self._nodes[h].next

    def handles(self) -> Iterator[Handle]:
        cur = self._head
        while cur is not None:
            yield cur
            cur = self._nodes[cur].next

    def __iter__(self) -> Iterator[T]:
        cur = self._head
        while cur is not None:
            node = self._nodes[cur]
            yield node.value
            cur = node.next

    def iter_mut(self) -> Iterator[Handle]:
        """Yield handles in order, tolerating a splice on the yielded one.

        The successor is captured before each handle is handed out, so a
        ``splice_replace`` (or ``insert_after``) on the current element is
        skipped over: iteration resumes at the element that originally
        followed it. Mutating any other element is not supported.
        """
        cur = self._head
        while cur is not None:
            nxt = self._nodes[cur].next
            yield cur
            cur = nxt

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return len(self) == len(other) and all(
            a == b for a, b in zip(self, other)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Sequence({list(self)!r})"
