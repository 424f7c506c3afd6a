"""Command alias table.

Config file format:
    {
        "aliases_of": {"Get-ChildItem": ["gci", "ls", "dir"]},
        "canonical_of": {"gci": "Get-ChildItem", "ls": "Get-ChildItem", "dir": "Get-ChildItem"}
    }

Either direction may be omitted; the missing one is derived from the other.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

import msgspec


class AliasTableSpec(msgspec.Struct, omit_defaults=True):
    """Alias table specification in JSON config."""

    aliases_of: dict[str, list[str]] = {}
    canonical_of: dict[str, str] = {}


_decoder = msgspec.json.Decoder(AliasTableSpec)


@dataclass(frozen=True)
class AliasTable:
    """Bidirectional command/alias mapping with case-insensitive lookups."""

    aliases_of: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    canonical_of: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        aliases_of: Optional[Mapping[str, Sequence[str]]] = None,
        canonical_of: Optional[Mapping[str, str]] = None,
    ) -> "AliasTable":
        aliases: dict[str, list[str]] = {}
        canonical: dict[str, str] = {}

        for command, names in (aliases_of or {}).items():
            for alias in names:
                aliases.setdefault(command.casefold(), []).append(alias)
                canonical.setdefault(alias.casefold(), command)

        for alias, command in (canonical_of or {}).items():
            canonical[alias.casefold()] = command
            known = aliases.setdefault(command.casefold(), [])
            if alias.casefold() not in {a.casefold() for a in known}:
                known.append(alias)

        return cls(
            aliases_of={k: tuple(v) for k, v in aliases.items()},
            canonical_of=canonical,
        )

    def aliases(self, command: str) -> tuple[str, ...]:
        """Aliases of ``command``; empty when it has none."""
        return self.aliases_of.get(command.casefold(), ())

    def canonical(self, alias: str) -> str:
        """Command that ``alias`` stands for, or '' if it is not an alias."""
        return self.canonical_of.get(alias.casefold(), "")

    def is_alias_of(self, alias: str, command: str) -> bool:
        return any(a.casefold() == alias.casefold() for a in self.aliases(command))

    def __len__(self) -> int:
        return len(self.canonical_of)


def load_alias_table(path: str | Path) -> AliasTable:
    """Load an alias table from a JSON config file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
    """
    with open(path, "rb") as f:
        spec = _decoder.decode(f.read())
    return AliasTable.from_mapping(spec.aliases_of, spec.canonical_of)
