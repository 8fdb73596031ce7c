"""Shard variable environment - one flat namespace per program run."""

from __future__ import annotations

from typing import Iterator


class Environment:
    """Maps variable names to numeric values.

    There is no nesting and no shadowing: a ``let`` for a name that is
    already bound overwrites the existing value in place.
    """

    def __init__(self) -> None:
        self.values: dict[str, float] = {}

    def set(self, name: str, value: float) -> None:
        self.values[name] = value

    def get(self, name: str) -> float | None:
        """Return the value bound to *name*, or None if it is unbound."""
        return self.values.get(name)

    def items(self):
        return self.values.items()

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __repr__(self) -> str:
        return f"Environment({self.values!r})"
