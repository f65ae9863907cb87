"""Database model backing the SQL document store."""

from typing import Any

from sqlalchemy import JSON, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from student_directory.db.session import Base


class DocumentRow(Base):
    """One document of one collection.

    `seq` records insertion order and breaks ties between equal sort keys.
    `timestamp_fields` names the keys of `data` holding encoded timestamps.
    """

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    doc_id: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    timestamp_fields: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
