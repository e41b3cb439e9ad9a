"""Display row produced from a decoded control record."""

from __future__ import annotations

from typing import NamedTuple


class FieldEntry(NamedTuple):
    """A (label, value) pair, both already rendered as text.

    Being a plain 2-tuple, an entry can be handed to any consumer that accepts
    rows of two strings.
    """

    label: str
    value: str
