"""
Application ORM Models
SQLAlchemy models for job applications and their status history
"""
from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func, false

from core.database import Base


# BIGSERIAL on PostgreSQL, rowid alias on SQLite
Identifier = BigInteger().with_variant(Integer, "sqlite")


class ApplicationModel(Base):
    """Job application table ORM model"""

    __tablename__ = "applications"

    # Primary Key
    id = Column(Identifier, primary_key=True, autoincrement=True)

    # Application Details
    company = Column(String(70), nullable=False, index=True)
    position = Column(String(100), nullable=False, index=True)
    website = Column(String(255), nullable=True)
    application_type = Column(String(30), nullable=True)

    # Owner
    created_by = Column(Identifier, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Soft delete
    deleted = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.company}>"


class ApplicationStatusModel(Base):
    """Append-only status event table ORM model"""

    __tablename__ = "application_statuses"

    # Primary Key
    id = Column(Identifier, primary_key=True, autoincrement=True)

    # Foreign Keys
    application_id = Column(
        Identifier,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Event Details
    status_type = Column(String(30), nullable=False, index=True)
    test_type = Column(String(30), nullable=True)
    interview_type = Column(String(30), nullable=True)
    notes = Column(Text, nullable=True)

    # Acting user
    created_by = Column(Identifier, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<ApplicationStatusModel {self.id} - {self.status_type}>"
