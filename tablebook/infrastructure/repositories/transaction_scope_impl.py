from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from tablebook.core.errors import ConflictError, InvalidArgumentError, StoreError
from tablebook.core.repositories.transaction_scope import TransactionScope

# SQLSTATE reported by serializable backends when a concurrent writer won.
SERIALIZATION_FAILURE = "40001"


def _is_serialization_failure(error: DBAPIError) -> bool:
    orig = error.orig
    return SERIALIZATION_FAILURE in (getattr(orig, "pgcode", None), getattr(orig, "sqlstate", None))


class SqlTransactionScope(TransactionScope):
    """
    Session-backed unit of work: commit on success, roll back on any error.

    A serialization failure means another transaction booked first, so it leaves as
    `ConflictError`. Other SQLAlchemy failures leave as `StoreError`, and integers the
    driver cannot bind leave as `InvalidArgumentError`. Classified booking errors pass
    through untouched.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except DBAPIError as e:
            self._db.rollback()
            if _is_serialization_failure(e):
                raise ConflictError("A concurrent transaction changed the same bookings; try again") from e
            raise StoreError(f"Database operation failed: {e}") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StoreError(f"Database operation failed: {e}") from e
        except OverflowError as e:
            self._db.rollback()
            raise InvalidArgumentError(f"Value out of range for the store: {e}") from e
        except Exception:
            self._db.rollback()
            raise
