from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gcsst.spells import LongSyntax, SpellSyntax

DEFAULT_OUTPUT = Path("grimoire") / "transmuted.json"
PATH_SEPARATOR = ","


@dataclass(frozen=True)
class TransmuteConfig:
    with_oneliner: bool = False
    indent: int | None = 2
    syntax: SpellSyntax = field(default_factory=LongSyntax)
