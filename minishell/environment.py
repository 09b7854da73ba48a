"""The shell's environment: an ordered list of NAME=VALUE entries."""

from collections.abc import Iterable, Iterator


def entry_name(entry: str) -> str:
    """Return the part of an entry before its first '='."""
    return entry.partition("=")[0]


def _entry_value(entry: str) -> str:
    return entry[len(entry_name(entry)) + 1:]


class Environment:
    """Ordered environment entries, kept as raw ``NAME=VALUE`` strings."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = list(entries)

    def get(self, key: str) -> str | None:
        """Return the value of the first entry named ``key``, or None."""
        for entry in self._entries:
            if entry_name(entry) == key:
                return _entry_value(entry)
        return None

    def add(self, entry: str) -> None:
        """Append an entry."""
        self._entries.append(entry)

    def update(self, entry: str) -> None:
        """Replace the first entry that starts with the new entry's name."""
        name = entry_name(entry)
        for position, existing in enumerate(self._entries):
            if existing.startswith(name):
                self._entries[position] = entry
                return

    def set(self, entry: str) -> None:
        """Update the entry's variable if it exists, otherwise append it."""
        if self.get(entry_name(entry)) is None:
            self.add(entry)
        else:
            self.update(entry)

    def unset(self, prefix: str) -> None:
        """Remove every entry that starts with ``prefix``."""
        self._entries = [e for e in self._entries if not e.startswith(prefix)]

    def as_list(self) -> list[str]:
        """Return a copy of the entries in order."""
        return list(self._entries)

    def sorted_declarations(self) -> list[str]:
        """Return ``declare -x NAME="VALUE"`` lines sorted by entry."""
        ordered = sorted(
            self._entries, key=lambda e: e.encode("utf-8", "surrogateescape")
        )
        return [f'declare -x {entry_name(e)}="{_entry_value(e)}"' for e in ordered]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)