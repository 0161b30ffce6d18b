"""Data model for log buffers and the rows they carry.

These are plain data containers. The rules for building rows live in
``consolelog.core.session``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from consolelog.core.config import COLUMNS, PROTOCOL_VERSION
from consolelog.core.errors import UnsupportedLevel


class LevelTag(str, Enum):
    """Row type as written on the wire."""

    LOG = ""  # "log" is sent as an empty string to save header bytes
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    GROUP = "group"
    GROUP_END = "groupEnd"
    GROUP_COLLAPSED = "groupCollapsed"
    TABLE = "table"

    @classmethod
    def parse(cls, name: str | LevelTag) -> LevelTag:
        """Validate a level name such as ``"warn"`` or ``"groupEnd"``."""
        if isinstance(name, LevelTag):
            return name
        if name == "log":
            return cls.LOG
        # The empty wire tag is not accepted as a level name.
        if isinstance(name, str) and name:
            try:
                return cls(name)
            except ValueError:
                pass
        raise UnsupportedLevel(str(name))

    @property
    def level_name(self) -> str:
        return "log" if self is LevelTag.LOG else self.value

    @property
    def is_structural(self) -> bool:
        """Group markers open and close groups and carry no call-site."""
        return self in _STRUCTURAL


_STRUCTURAL = frozenset({LevelTag.GROUP, LevelTag.GROUP_END, LevelTag.GROUP_COLLAPSED})


@dataclass(frozen=True)
class Row:
    """One logged entry: converted data, call-site text and level."""

    data: Any
    call_site: str | None
    type: LevelTag

    def to_list(self) -> list[Any]:
        return [self.data, self.call_site, self.type.value]


@dataclass
class LogBuffer:
    """The ``{version, columns, rows}`` payload sent to the browser.

    Rows are only ever appended. A buffer lives as long as its session.
    """

    version: str = PROTOCOL_VERSION
    columns: tuple[str, ...] = COLUMNS
    rows: list[Row] = field(default_factory=list)

    def append(self, row: Row) -> None:
        self.rows.append(row)

    def __len__(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "columns": list(self.columns),
            "rows": [row.to_list() for row in self.rows],
        }
