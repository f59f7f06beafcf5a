from __future__ import annotations

from typing import Iterator

LANGUAGE  = "LANGUAGE"
TYPE      = "TYPE"
MEDIATYPE = "MEDIATYPE"
ENCODING  = "ENCODING"
VALUE     = "VALUE"


class ParameterSet:
    """Ordered, case-insensitive multimap of property parameters.

    Repeated names are kept as separate entries in insertion order; nothing
    is deduplicated and no name is validated.
    """

    def __init__(self, pairs: list[tuple[str, str]] | None = None):
        self._pairs: list[tuple[str, str]] = []
        for name, value in pairs or []:
            self.add(name, value)

    # ── Generic access ─────────────────────────────────────────────────────────

    def get(self, name: str) -> str | None:
        key = name.upper()
        for n, v in self._pairs:
            if n.upper() == key:
                return v
        return None

    def get_all(self, name: str) -> list[str]:
        key = name.upper()
        return [v for n, v in self._pairs if n.upper() == key]

    def add(self, name: str, value: str) -> None:
        self._pairs.append((name, value))

    def set(self, name: str, value: str | None) -> None:
        """Replace every value of ``name``; ``None`` just removes them."""
        key = name.upper()
        for i, (n, _) in enumerate(self._pairs):
            if n.upper() == key:
                break
        else:
            i = len(self._pairs)
        self.remove(name)
        if value is not None:
            # keep the slot of the first old entry so the order stays stable
            self._pairs.insert(i, (name, value))

    def remove(self, name: str) -> None:
        key = name.upper()
        self._pairs = [(n, v) for n, v in self._pairs if n.upper() != key]

    def names(self) -> list[str]:
        seen: list[str] = []
        for n, _ in self._pairs:
            if n.upper() not in seen:
                seen.append(n.upper())
        return seen

    def grouped(self) -> list[tuple[str, list[str]]]:
        return [(name, self.get_all(name)) for name in self.names()]

    def copy(self) -> ParameterSet:
        return ParameterSet(list(self._pairs))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return [(n.upper(), v) for n, v in self._pairs] == [
            (n.upper(), v) for n, v in other._pairs
        ]

    def __repr__(self) -> str:
        return f"ParameterSet({self._pairs!r})"

    # ── Well-known parameters ──────────────────────────────────────────────────

    @property
    def language(self) -> str | None:
        return self.get(LANGUAGE)

    @language.setter
    def language(self, value: str | None) -> None:
        self.set(LANGUAGE, value)

    @property
    def type(self) -> str | None:
        return self.get(TYPE)

    @type.setter
    def type(self, value: str | None) -> None:
        self.set(TYPE, value)

    @property
    def media_type(self) -> str | None:
        return self.get(MEDIATYPE)

    @media_type.setter
    def media_type(self, value: str | None) -> None:
        self.set(MEDIATYPE, value)

    @property
    def encoding(self) -> str | None:
        return self.get(ENCODING)

    @encoding.setter
    def encoding(self, value: str | None) -> None:
        self.set(ENCODING, value)

    @property
    def value_type(self) -> str | None:
        return self.get(VALUE)

    @value_type.setter
    def value_type(self, value: str | None) -> None:
        self.set(VALUE, value)
