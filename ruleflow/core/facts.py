"""Mutable fact store shared by conditions, actions and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .errors import NoSuchFactError, require_not_none


@dataclass(frozen=True)
class Fact:
    """A named value held in a Facts store."""

    name: str
    value: Any

    def __str__(self) -> str:
        return f"Fact{{name='{self.name}', value={self.value!r}}}"


class Facts:
    """Named value store.

    Absent facts and facts holding ``None`` are distinguished: use
    ``name in facts`` to test presence, ``get`` to read with a default and
    ``require`` to read a fact that must exist.
    """

    def __init__(self, initial: dict[str, Any] | None = None, **kwargs: Any):
        self._facts: dict[str, Any] = {}
        for name, value in {**(initial or {}), **kwargs}.items():
            self.put(name, value)

    def put(self, name: str, value: Any) -> None:
        """Add a fact, replacing any fact with the same name."""
        require_not_none(name, "Fact name must not be None")
        self._facts[name] = value

    def add(self, fact: Fact) -> None:
        require_not_none(fact, "Fact must not be None")
        self.put(fact.name, fact.value)

    def remove(self, name: str) -> None:
        """Remove a fact by name; a no-op when the fact is absent."""
        require_not_none(name, "Fact name must not be None")
        self._facts.pop(name, None)

    def get(self, name: str, default: Any = None) -> Any:
        return self._facts.get(name, default)

    def require(self, name: str) -> Any:
        """Return the value of a fact, raising NoSuchFactError if absent."""
        if name not in self._facts:
            raise NoSuchFactError(name, f"No fact named '{name}' found in known facts: {self}")
        return self._facts[name]

    def get_fact(self, name: str) -> Fact | None:
        if name not in self._facts:
            return None
        return Fact(name, self._facts[name])

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of the facts as a plain dict."""
        return dict(self._facts)

    def clear(self) -> None:
        self._facts.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._facts

    def __iter__(self) -> Iterator[Fact]:
        for name, value in list(self._facts.items()):
            yield Fact(name, value)

    def __len__(self) -> int:
        return len(self._facts)

    def __str__(self) -> str:
        return "[" + ", ".join(str(fact) for fact in self) + "]"

    def __repr__(self) -> str:
        return f"Facts({self._facts!r})"
