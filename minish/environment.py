"""The shell's environment: an ordered list of ``NAME=value`` entries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Environment:
    """Ordered environment entries, looked up and changed by variable name.

    Entries are kept as ``NAME=value`` strings in insertion order; an entry
    without ``=`` is kept but never matches a lookup.
    """

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Environment":
        """Build an environment from a name-to-value mapping, such as ``os.environ``."""
        return cls(f"{name}={value}" for name, value in mapping.items())

    def get(self, key: str) -> str | None:
        """Return the value of the first entry named ``key``, or ``None``."""
        for entry in self._entries:
            name, eq, value = entry.partition("=")
            if eq and name == key:
                return value
        return None

    def set(self, key: str, value: str) -> None:
        """Replace the first entry named ``key``, or append a new one."""
        prefix = key + "="
        new_entry = prefix + value
        for index, entry in enumerate(self._entries):
            if entry.startswith(prefix):
                self._entries[index] = new_entry
                return
        self._entries.append(new_entry)

    def remove(self, key: str) -> None:
        """Remove every entry named ``key``."""
        prefix = key + "="
        self._entries = [e for e in self._entries if not e.startswith(prefix)]

    def copy(self) -> "Environment":
        """Return an independent copy."""
        return Environment(self._entries)

    def entries(self) -> list[str]:
        """Return the entries as a new list, in order."""
        return list(self._entries)

    def to_dict(self) -> dict[str, str]:
        """Return the variables as a dict; the first entry of a name wins."""
        result: dict[str, str] = {}
        for entry in self._entries:
            name, eq, value = entry.partition("=")
            if eq:
                result.setdefault(name, value)
        return result

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"