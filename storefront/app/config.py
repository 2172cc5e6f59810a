"""Runtime settings.

Values come from the environment, optionally seeded from a ``.env`` file:

* ``STORE_CUSTOMERS_FILE`` / ``STORE_INVENTORY_FILE`` / ``STORE_COMMANDS_FILE``
* ``STORE_CURRENT_YEAR``: latest acceptable item year (defaults to this year)
* ``STORE_LOG_LEVEL``: logging level name (defaults to WARNING)
* ``STORE_SNAPSHOT_JSON``: if set, the final store state is written there
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv  # type: ignore

from ..core.context import ValidationContext
from ..core.utils import parse_positive_int


def _env_year(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if not raw:
        return None
    if parse_positive_int(raw.strip()) is None:
        raise ValueError(f"{name} must be a positive year, got {raw!r}")
    return int(raw.strip())


@dataclass
class Settings:
    customers_file: str = "hw4customers.txt"
    inventory_file: str = "hw4inventory.txt"
    commands_file: str = "hw4commands.txt"
    current_year: Optional[int] = None
    log_level: str = "WARNING"
    snapshot_json: Optional[str] = None

    @classmethod
    def from_env(cls, load_file: bool = True) -> "Settings":
        if load_file:
            load_dotenv()
        defaults = cls()
        return cls(
            customers_file=os.getenv("STORE_CUSTOMERS_FILE") or defaults.customers_file,
            inventory_file=os.getenv("STORE_INVENTORY_FILE") or defaults.inventory_file,
            commands_file=os.getenv("STORE_COMMANDS_FILE") or defaults.commands_file,
            current_year=_env_year("STORE_CURRENT_YEAR"),
            log_level=(os.getenv("STORE_LOG_LEVEL") or defaults.log_level).upper(),
            snapshot_json=os.getenv("STORE_SNAPSHOT_JSON") or None,
        )

    def validation_context(self) -> ValidationContext:
        if self.current_year is None:
            return ValidationContext.today()
        return ValidationContext(current_year=self.current_year)
