"""SQLAlchemy ORM models mapped to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tsm.adapters.persistence.database import Base

# BigInteger ids on PostgreSQL, INTEGER on SQLite so autoincrement keeps working.
Id = BigInteger().with_variant(Integer, "sqlite")


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(Id, nullable=False)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    priority: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    assignees: Mapped[list["AssignmentAssigneeModel"]] = relationship(
        back_populates="assignment"
    )
    logs: Mapped[list["AssignmentLogModel"]] = relationship(back_populates="assignment")

    __table_args__ = (
        Index("idx_assignments_member", "member_id"),
        Index("idx_assignments_created_at", "created_at"),
    )


class AssignmentAssigneeModel(Base):
    __tablename__ = "assignment_assignees"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    assignment_id: Mapped[int] = mapped_column(
        Id, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(Id, nullable=False)

    assignment: Mapped["AssignmentModel"] = relationship(back_populates="assignees")

    __table_args__ = (
        UniqueConstraint("assignment_id", "user_id", name="uq_assignment_assignee"),
        Index("idx_assignment_assignees_user", "user_id"),
    )


class AssignmentLogModel(Base):
    __tablename__ = "assignment_logs"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    assignment_id: Mapped[int] = mapped_column(
        Id, ForeignKey("assignments.id"), nullable=False
    )
    actor_id: Mapped[int] = mapped_column(Id, nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    assignment: Mapped["AssignmentModel"] = relationship(back_populates="logs")

    __table_args__ = (Index("idx_assignment_logs_assignment", "assignment_id"),)


class SchedulerModel(Base):
    __tablename__ = "schedulers"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    priority: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    assignees: Mapped[list["SchedulerAssigneeModel"]] = relationship(
        back_populates="scheduler"
    )

    __table_args__ = (
        Index("idx_schedulers_status", "status"),
        Index("idx_schedulers_created_at", "created_at"),
    )


class SchedulerAssigneeModel(Base):
    __tablename__ = "scheduler_assignees"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    scheduler_id: Mapped[int] = mapped_column(
        Id, ForeignKey("schedulers.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int | None] = mapped_column(Id, nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    scheduler: Mapped["SchedulerModel"] = relationship(back_populates="assignees")

    __table_args__ = (
        UniqueConstraint("scheduler_id", "user_id", name="uq_scheduler_assignee"),
        Index("idx_scheduler_assignees_user", "user_id"),
    )
