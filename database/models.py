# /database/models.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

# Keys a users row can carry: signed 64-bit, the widest integer both engines store.
MIN_USER_ID = -2**63
MAX_USER_ID = 2**63 - 1


def is_valid_id(user_id):
    return isinstance(user_id, int) and MIN_USER_ID <= user_id <= MAX_USER_ID


@dataclass
class User:
    """A row of the users table. `id` stays None until the row is inserted."""
    name: str
    email: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row):
        return cls(id=row['id'], name=row['name'], email=row['email'])


class Status(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    CONNECTION_ERROR = "connection_error"


@dataclass
class StoreResult:
    """Outcome of one data-access call: a status tag, its payload and a diagnostic message."""
    status: Status
    value: Any = None
    message: str = ""

    @property
    def ok(self):
        return self.status is Status.OK
