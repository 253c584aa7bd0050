"""Multi-line, human-readable descriptions shared by dynamics and event conditions."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, TextIO

_WIDTH = 60
_LABEL_WIDTH = 24


def format_description(
    title: str,
    fields: Iterable[tuple[str, Any]],
    display_decorator: bool = True,
) -> str:
    """Render a titled block of ``label: value`` lines.

    Args:
        title: Block title, shown in the decorator line.
        fields: ``(label, value)`` pairs, rendered in order.
        display_decorator: If True, frame the block with header/footer rules.

    Returns:
        str: The rendered block.
    """
    lines = []
    if display_decorator:
        lines.append(f" {title} ".center(_WIDTH, "-"))
    lines.extend(f"{label + ':':<{_LABEL_WIDTH}}{value}" for label, value in fields)
    if display_decorator:
        lines.append("-" * _WIDTH)
    return "\n".join(lines)


class Describable(ABC):
    """Mixin deriving ``__str__`` and ``print`` from a ``describe`` method."""

    __slots__ = ()

    @abstractmethod
    def describe(self, display_decorator: bool = True) -> str:
        """Multi-line description, framed by header/footer rules if *display_decorator*."""

    def print(self, file: TextIO | None = None, display_decorator: bool = True) -> None:
        """Write the description to *file* (default ``sys.stdout``)."""
        print(self.describe(display_decorator), file=file if file is not None else sys.stdout)

    def __str__(self) -> str:
        return self.describe()
