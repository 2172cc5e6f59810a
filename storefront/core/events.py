"""Event structures used in the system (commands replayed against the store)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .types import CommandKind


@dataclass
class Command:
    kind: CommandKind
    args: List[str] = field(default_factory=list)
    line_no: Optional[int] = None

    @property
    def symbol(self) -> str:
        return self.kind.value
