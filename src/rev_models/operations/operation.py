"""Operation descriptor passed to validators and backends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class OperationName(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    REMOVE = "remove"
    EXEC = "exec"


@dataclass(frozen=True)
class ModelOperation:
    """The operation being performed and, for read/update/remove, its where clause."""

    operation: str
    where: dict[str, Any] | None = None
