"""Monotonic integer id sequences."""


class IdSequence:
    """
    Issues increasing integer ids, never reusing one.

    Sequences are passed explicitly to whoever allocates ids: the network
    owns its member and group sequences, members share a request sequence.
    """

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self) -> int:
        """Return the next id and advance the sequence."""
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        """The id the next call to ``next_id`` will return."""
        return self._next

    def __repr__(self) -> str:
        return f"IdSequence(next={self._next})"


# Process-wide request sequence, used by members that are not given their own.
REQUEST_IDS = IdSequence()
