"""Equivalence class of row identifiers.

An equivalence class belongs to an attribute set X. Rows t and u are members
of the class generated by X iff t[X] == u[X]. Only row IDs are stored, plus
the value the rows share on X (the classifier).

This implementation is not thread-safe.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, Sequence, TypeVar

C = TypeVar("C")
R = TypeVar("R")

ATTRIBUTE_SEPARATOR = ":"


def attribute_label(attributes: Sequence[str]) -> str:
    """Build the label of an attribute set.

    Args:
        attributes: Attribute (column) names in the set

    Returns:
        Single name, or the names joined with ATTRIBUTE_SEPARATOR

    """
    if isinstance(attributes, str):
        return attributes
    if len(attributes) == 0:
        raise ValueError("Attribute set must contain at least one attribute")
    return ATTRIBUTE_SEPARATOR.join(str(a) for a in attributes)


class EquivalenceClass(Generic[C, R]):
    """Row IDs that agree on the values of one attribute set.

    Rows keep their insertion order and duplicates are not filtered out;
    callers insert each row ID once. The first ID given to add_row is kept
    as the representative of the class.
    """

    def __init__(
        self, classifier: Optional[C] = None, attribute: Optional[str] = None,
    ) -> None:
        """Create an empty equivalence class.

        Args:
            classifier: Value the rows have on the generating attribute set
            attribute: Label of the generating attribute set

        """
        self._classifier = classifier
        self._attribute = attribute
        self._rows: list[R] = []
        self._random_row_id: Optional[R] = None
        self._has_random_row_id = False

    def add_row(self, row_id: R) -> None:
        """Append a row ID; the first one ever passed here becomes the representative."""
        if not self._has_random_row_id:
            self._random_row_id = row_id
            self._has_random_row_id = True
        self._rows.append(row_id)

    def add_rows(self, ids: Iterable[R]) -> None:
        """Append row IDs in order.

        The representative is not updated here, only add_row sets it.
        """
        self._rows.extend(ids)

    def contains(self, row_id: R) -> bool:
        return row_id in self._rows

    def get_classifier(self) -> Optional[C]:
        return self._classifier

    def get_attribute(self) -> Optional[str]:
        """Label of the attribute set, names separated by ':' for several attributes."""
        return self._attribute

    def get_size(self) -> int:
        return len(self._rows)

    def get_rows(self) -> tuple[R, ...]:
        """Snapshot of the row IDs in insertion order."""
        return tuple(self._rows)

    def get_random_row_id(self) -> Optional[R]:
        """Arbitrary member of the class (the first row given to add_row)."""
        return self._random_row_id

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def __iter__(self) -> Iterator[R]:
        return iter(tuple(self._rows))

    def __str__(self) -> str:
        rows = ", ".join(str(r) for r in self._rows)
        return f"[{self._classifier}: [{rows}]]"

    def __repr__(self) -> str:
        return (
            f"EquivalenceClass(attribute={self._attribute!r}, "
            f"classifier={self._classifier!r}, size={len(self._rows)})"
        )
