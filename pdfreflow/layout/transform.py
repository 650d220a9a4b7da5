"""Current transformation matrix tracking for a content stream.

The tracker mirrors the graphics-state part of a PDF interpreter that
matters for placing images: `q` saves the matrix, `Q` restores it and `cm`
composes a new matrix onto the current one.
"""

from __future__ import annotations

from typing import List

from pdfreflow.docs.model import IDENTITY, Concat, Restore, Save, TransformMatrix, TransformOp


def compose(m1: TransformMatrix, m2: TransformMatrix) -> TransformMatrix:
    """Return `m1 * m2`, the matrix `m2` applied in the space of `m1`.

    Doxygen:
    - @param m1: Current matrix.
    - @param m2: Incoming operands of a `cm` instruction.
    - @return: The composed matrix.
    """
    return TransformMatrix(
        m1.a * m2.a + m1.c * m2.b,
        m1.b * m2.a + m1.d * m2.b,
        m1.a * m2.c + m1.c * m2.d,
        m1.b * m2.c + m1.d * m2.d,
        m1.a * m2.e + m1.c * m2.f + m1.e,
        m1.b * m2.e + m1.d * m2.f + m1.f,
    )


class TransformTracker:
    """Current matrix plus a stack of saved snapshots, local to one page pass."""

    def __init__(self, current: TransformMatrix = IDENTITY) -> None:
        self.current = current
        self._stack: List[TransformMatrix] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save(self) -> None:
        # matrices are immutable, pushing the reference is a snapshot
        self._stack.append(self.current)

    def restore(self) -> None:
        if self._stack:
            self.current = self._stack.pop()

    def concat(self, matrix: TransformMatrix) -> None:
        self.current = compose(self.current, matrix)

    def apply(self, op: TransformOp) -> TransformMatrix:
        """Apply a Save/Restore/Concat instruction and return the current matrix."""
        if isinstance(op, Save):
            self.save()
        elif isinstance(op, Restore):
            self.restore()
        elif isinstance(op, Concat):
            self.concat(op.matrix)
        return self.current
