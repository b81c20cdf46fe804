"""Database table models."""

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.db.base import Base


class Document(Base):
    """One item of a logical table, addressed by (partition key, sort key).

    Tables without a sort key store an empty string in ``sort_key``.
    """

    __tablename__ = "documents"
    # Lookups by sort key alone (items whose partition is not known).
    __table_args__ = (Index("ix_documents_table_sort", "table_name", "sort_key"),)

    table_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    partition_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    sort_key: Mapped[str] = mapped_column(String(255), primary_key=True, default="")
    data: Mapped[dict] = mapped_column(JSON, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
