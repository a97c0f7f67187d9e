"""Immutable audit trail of admin actions."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restro_admin.db.session import Base


class ImmutableEntryError(RuntimeError):
    pass


class ActivityLog(Base):
    __tablename__ = "activity_logs"
    __table_args__ = (Index("ix_activity_logs_timestamp_id", "timestamp", "id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    user_name: Mapped[str] = mapped_column(String(120))
    restaurant_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    module: Mapped[str] = mapped_column(String(64), index=True)
    sub_module: Mapped[str] = mapped_column(String(64), index=True)
    action: Mapped[str] = mapped_column(String(16), index=True)  # see ActivityAction
    target_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user = relationship("AdminUser")


@event.listens_for(ActivityLog, "before_update")
def _refuse_update(mapper, connection, target: ActivityLog) -> None:  # noqa: ANN001
    raise ImmutableEntryError(f"activity log entry {target.id} is immutable")


@event.listens_for(ActivityLog, "before_delete")
def _refuse_delete(mapper, connection, target: ActivityLog) -> None:  # noqa: ANN001
    raise ImmutableEntryError(f"activity log entry {target.id} cannot be deleted")
