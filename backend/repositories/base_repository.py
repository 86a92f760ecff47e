"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, List, Optional, Type, Any
from sqlalchemy import text
from sqlalchemy.orm import Session

from constants import DatabaseLimits

T = TypeVar('T')


def id_in_range(id: Any) -> bool:
    """Whether id fits the INTEGER primary key column. Larger ids can never be stored."""
    if isinstance(id, int):
        return DatabaseLimits.MIN_ID <= id <= DatabaseLimits.MAX_ID
    return True


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Repositories flush but never commit; the calling service owns the
    transaction.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        if not id_in_range(id):
            return None
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_all(self) -> List[T]:
        """
        Retrieve all records, ordered by primary key.

        Returns:
            List of model instances (empty if none exist)
        """
        return self.db.query(self.model).order_by(self.model.id).all()

    def save(self, obj: T) -> T:
        """
        Insert or replace a record.

        A record without an id is inserted and receives a new id. A record
        with an id replaces the stored row with that id, or is inserted
        under that id when no such row exists.

        Args:
            obj: Model instance to persist

        Returns:
            The persistent instance with its id populated
        """
        if getattr(obj, 'id', None) is None:
            self.db.add(obj)
            self.db.flush()
            return obj

        persisted = self.db.merge(obj)
        self.db.flush()
        self._sync_id_sequence()
        return persisted

    def _sync_id_sequence(self) -> None:
        """
        Move the PostgreSQL id sequence past the highest stored id.

        Rows inserted with an explicit id do not advance the sequence, so
        later inserts without an id would collide. SQLite derives new ids
        from the table itself and needs nothing.
        """
        if self.db.get_bind().dialect.name != 'postgresql':
            return
        table = self.model.__table__.name
        # Never moves the sequence backwards, so ids of deleted rows stay retired
        self.db.execute(
            text(
                f"SELECT setval(seq, GREATEST("
                f"COALESCE((SELECT MAX(id) FROM {table}), 0), "
                f"COALESCE(pg_sequence_last_value(seq::regclass), 0), 1)) "
                f"FROM (SELECT pg_get_serial_sequence(:table, 'id') AS seq) AS s"
            ),
            {"table": table},
        )

    def delete(self, obj: T) -> None:
        """
        Delete a record from the database.

        Args:
            obj: Model instance to delete
        """
        self.db.delete(obj)
        self.db.flush()

    def delete_by_id(self, id: Any) -> bool:
        """
        Delete a record by its ID.

        Args:
            id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        obj = self.get_by_id(id)
        if obj:
            self.delete(obj)
            return True
        return False

    def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records
        """
        return self.db.query(self.model).count()

    def exists(self, id: Any) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        if not id_in_range(id):
            return False
        return self.db.query(self.model).filter(self.model.id == id).count() > 0
