"""Change tracking for mutable sequences held by an entity.

A ``TrackedList`` behaves like a ``list`` but calls its listener once after
every structural mutation (insert, remove, replace, reorder). The patient
entity uses this to bump its version counter, giving consumers a cheap
"has this changed since I last looked" signal without deep comparisons.

Only in-place mutation is observed. Rebinding the attribute that holds the
list is invisible to the list itself.
"""

from typing import Callable, Iterable, Optional

Listener = Callable[[], None]


class TrackedList(list):
    """List that reports each in-place mutation to a listener.

    Parameters:
        iterable: Initial contents (copied)
        listener: Zero-argument callable invoked once per mutation
    """

    def __init__(self, iterable: Iterable = (), listener: Optional[Listener] = None):
        super().__init__(iterable)
        self._listener = listener

    def observe(self, listener: Optional[Listener]) -> "TrackedList":
        """Replace the listener; returns self for chaining."""
        self._listener = listener
        return self

    def _changed(self) -> None:
        if self._listener is not None:
            self._listener()

    def append(self, item) -> None:
        super().append(item)
        self._changed()

    def extend(self, iterable) -> None:
        super().extend(iterable)
        self._changed()

    def insert(self, index, item) -> None:
        super().insert(index, item)
        self._changed()

    def remove(self, item) -> None:
        super().remove(item)
        self._changed()

    def pop(self, index=-1):
        item = super().pop(index)
        self._changed()
        return item

    def clear(self) -> None:
        super().clear()
        self._changed()

    def sort(self, *args, **kwargs) -> None:
        super().sort(*args, **kwargs)
        self._changed()

    def reverse(self) -> None:
        super().reverse()
        self._changed()

    def __setitem__(self, index, value) -> None:
        super().__setitem__(index, value)
        self._changed()

    def __delitem__(self, index) -> None:
        super().__delitem__(index)
        self._changed()

    def __iadd__(self, other):
        super().__iadd__(other)
        self._changed()
        return self

    def __imul__(self, n):
        super().__imul__(n)
        self._changed()
        return self

    def __reduce_ex__(self, protocol):
        # Listeners are bound to a live entity and are not picklable.
        return (list, (list(self),))
