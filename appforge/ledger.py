"""
Dependency ledger: gems contributed by tasks, merged into the Gemfile once.

Declarations are line-oriented so a gem can be found by name with a single
anchored pattern. A gem already declared in the Gemfile is skipped, never
rewritten, which makes the merge idempotent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from loguru import logger

from appforge.errors import ManifestError


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str | None = None
    groups: tuple[str, ...] | None = None
    path: str | None = None

    def declaration(self) -> str:
        parts = [f"gem '{self.name}'"]
        if self.version:
            parts.append(f"'{self.version}'")
        if self.groups:
            parts.append(f"groups: %i({' '.join(self.groups)})")
        if self.path:
            parts.append(f"path: '{self.path}'")
        return ", ".join(parts)


class DependencyLedger:
    """Ordered, append-only collection of Dependency entries, unique by name."""

    def __init__(self, entries: Iterable[Dependency] = ()):
        self._entries: list[Dependency] = []
        for entry in entries:
            self.append(entry)

    @classmethod
    def union(cls, ledgers: Iterable[DependencyLedger]) -> DependencyLedger:
        """Concatenate ledgers in order; the first entry for a name wins."""
        merged = cls()
        for ledger in ledgers:
            for entry in ledger:
                merged.append(entry)
        return merged

    def add(
        self,
        name: str,
        version: str | None = None,
        groups: Sequence[str] | None = None,
        path: str | None = None,
    ) -> Dependency:
        entry = Dependency(name, version, tuple(groups) if groups else None, path)
        return self.append(entry)

    def append(self, entry: Dependency) -> Dependency:
        existing = self.get(entry.name)
        if existing is not None:
            if existing != entry:
                logger.debug(f"[LEDGER] Keeping first declaration of {entry.name}: {existing.declaration()}")
            return existing
        self._entries.append(entry)
        return entry

    def get(self, name: str) -> Dependency | None:
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DependencyLedger({self.names()!r})"


# ---------------------------------------------------------------------------
# Gemfile merge
# ---------------------------------------------------------------------------

def is_declared(manifest_text: str, name: str) -> bool:
    return re.search(rf"""^gem\s*['"]{re.escape(name)}['"]""", manifest_text, re.MULTILINE) is not None


def pending(manifest_text: str, entries: Iterable[Dependency]) -> list[Dependency]:
    """Entries not yet declared in the manifest, first occurrence per name."""
    result: list[Dependency] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen or is_declared(manifest_text, entry.name):
            continue
        seen.add(entry.name)
        result.append(entry)
    return result


def append_to_manifest(manifest_path: Path, entries: Iterable[Dependency]) -> list[Dependency]:
    """Append undeclared entries to the manifest. Returns exactly what was appended."""
    manifest_path = Path(manifest_path)
    try:
        contents = manifest_path.read_text()
    except OSError as e:
        raise ManifestError(f"Cannot read {manifest_path}: {e}") from e

    to_add = pending(contents, entries)
    if not to_add:
        logger.info(f"All gems already declared in {manifest_path.name}")
        return []

    lines = [entry.declaration() for entry in to_add]
    prefix = "" if not contents or contents.endswith("\n") else "\n"
    logger.info(f"Writing gems to {manifest_path.name}")
    try:
        with open(manifest_path, "a") as f:
            f.write(prefix + "\n".join(lines) + "\n")
    except OSError as e:
        raise ManifestError(f"Cannot write {manifest_path}: {e}") from e

    for line in lines:
        logger.debug(f"+ {line}")
    return to_add
