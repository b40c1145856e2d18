"""
Shared repository behaviour for records that carry a lifecycle status.

Values are addressed by persisted column name (the lowercase keys the
lifecycle engines read), not by ORM attribute name.
"""

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class StatusConflictError(ValueError):
    """Raised when a record's status changed between read and write."""

    def __init__(self, record_id: Any, expected_status: Optional[str]):
        self.record_id = record_id
        self.expected_status = expected_status
        super().__init__(
            f"Status of record '{record_id}' is no longer '{expected_status}'"
        )


# =============================================================================
# VALUE COERCION
# =============================================================================

# Quote/invoice amounts are stored as Numeric(12, 2)
AMOUNT_PLACES = Decimal("0.01")
AMOUNT_LIMIT = Decimal(10) ** 10


def to_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"'{value}' is not a text value")


def to_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Amount with two decimal places.

    Raises:
        ValueError: Not a number, not finite, or too large for the column
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not a valid amount")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"'{value}' is not a valid amount")
    if not amount.is_finite():
        raise ValueError(f"'{value}' is not a valid amount")
    if abs(amount) >= AMOUNT_LIMIT:
        raise ValueError(f"Amount '{value}' is too large")
    return amount.quantize(AMOUNT_PLACES, rounding=ROUND_HALF_UP)


def to_string_list(value: Any) -> Optional[list]:
    if value is None:
        return None
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value]
    raise ValueError(f"'{value}' is not a list of services")


# =============================================================================
# REPOSITORY
# =============================================================================

class LifecycleRepository:
    """
    Base repository for a model with a primary key and a status column.

    Subclasses set ``model``, ``status_column`` and optionally ``coercers``
    (column name -> converter applied before writing).
    """

    model: Any = None
    status_column: str = ""
    coercers: Mapping[str, Callable[[Any], Any]] = {}

    def __init__(self, db: AsyncSession):
        """
        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    @property
    def _pk(self):
        return self.model.__table__.primary_key.columns.values()[0]

    def attribute_for(self, column_name: str) -> str:
        """
        ORM attribute key for a persisted column name.

        Raises:
            ValueError: If the model has no such column
        """
        column = self.model.__table__.columns.get(column_name)
        if column is None:
            raise ValueError(f"Unknown column '{column_name}' on {self.model.__tablename__}")
        return self.model.__mapper__.get_property_by_column(column).key

    async def get(self, record_id: Any):
        query = select(self.model).where(self._pk == record_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update_fields(self, record_id: Any, values: Mapping[str, Any]):
        """
        Write column values onto a record.

        Returns:
            The refreshed model, or None if the record does not exist

        Raises:
            ValueError: If a column is unknown or a value cannot be coerced
        """
        instance = await self.get(record_id)
        if instance is None:
            return None

        converted: Dict[str, Any] = {}
        for column_name, value in values.items():
            coerce = self.coercers.get(column_name)
            converted[self.attribute_for(column_name)] = coerce(value) if coerce else value

        for attribute, value in converted.items():
            setattr(instance, attribute, value)

        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def update_status(
        self,
        record_id: Any,
        new_status: str,
        expected_status: Optional[str] = None,
    ):
        """
        Persist a new status.

        With ``expected_status`` the write is conditional on the stored
        status still matching it.

        Raises:
            StatusConflictError: If no row matched
        """
        status_col = self.model.__table__.columns[self.status_column]
        stmt = (
            update(self.model)
            .where(self._pk == record_id)
            .values({status_col: new_status})
            .execution_options(synchronize_session=False)
        )
        if expected_status is not None:
            stmt = stmt.where(status_col == expected_status)

        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            raise StatusConflictError(record_id, expected_status)

        instance = await self.get(record_id)
        await self.db.refresh(instance)
        return instance
