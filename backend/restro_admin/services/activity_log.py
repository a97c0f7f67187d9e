"""Activity log: recording admin actions and querying the audit trail."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from restro_admin.core.config import settings
from restro_admin.models.activity_log import ActivityLog
from restro_admin.models.enums import ActivityAction
from restro_admin.models.user import AdminUser

logger = logging.getLogger(__name__)


class ActivityLogError(RuntimeError):
    pass


class InvalidArgument(ActivityLogError, ValueError):
    pass


class StorageUnavailable(ActivityLogError):
    pass


@dataclass(frozen=True)
class ActivityFilters:
    module: str | None = None
    sub_module: str | None = None


@dataclass(frozen=True)
class PageRequest:
    index: int = 0
    size: int = 10

    @property
    def offset(self) -> int:
        return self.index * self.size


@dataclass
class ActivityLogPage:
    entries: list[ActivityLog] = field(default_factory=list)
    total_count: int = 0


@dataclass
class ActivityFacets:
    modules: list[str] = field(default_factory=list)
    sub_modules: list[str] = field(default_factory=list)


def validate_page(page: PageRequest, *, max_size: int | None = None) -> None:
    max_size = max_size or settings.activity_log_max_page_size
    if isinstance(page.index, bool) or not isinstance(page.index, int) or page.index < 0:
        raise InvalidArgument(f"page index must be a non-negative integer, got {page.index!r}")
    if isinstance(page.size, bool) or not isinstance(page.size, int) or not 1 <= page.size <= max_size:
        raise InvalidArgument(f"page size must be between 1 and {max_size}, got {page.size!r}")


def _apply_filters(stmt, filters: ActivityFilters):  # noqa: ANN001, ANN202
    # Empty string means "all"; the admin UI sends "" for its "All Modules" option.
    if filters.module:
        stmt = stmt.where(ActivityLog.module == filters.module)
    if filters.sub_module:
        stmt = stmt.where(ActivityLog.sub_module == filters.sub_module)
    return stmt


def list_entries(db: Session, filters: ActivityFilters, page: PageRequest) -> ActivityLogPage:
    """
    One page of entries matching `filters`, most recent first.

    Ties on timestamp are broken by insertion order (id), newest first, so repeated
    identical queries return identical pages. `total_count` ignores pagination.
    """
    validate_page(page)
    try:
        total = db.scalar(_apply_filters(select(func.count(ActivityLog.id)), filters)) or 0
        entries: list[ActivityLog] = []
        if page.offset < total:
            stmt = (
                _apply_filters(select(ActivityLog), filters)
                .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
                .offset(page.offset)
                .limit(page.size)
            )
            entries = list(db.scalars(stmt).all())
    except SQLAlchemyError as e:
        logger.exception("Activity log query failed (filters=%s, page=%s)", filters, page)
        raise StorageUnavailable("activity log storage is unavailable") from e
    return ActivityLogPage(entries=entries, total_count=total)


def list_facets(db: Session) -> ActivityFacets:
    """Distinct modules and sub-modules present in the log, sorted for stable dropdowns."""
    try:
        # One statement, so both lists come from the same snapshot.
        pairs = db.execute(select(ActivityLog.module, ActivityLog.sub_module).distinct()).all()
    except SQLAlchemyError as e:
        logger.exception("Activity log facet query failed")
        raise StorageUnavailable("activity log storage is unavailable") from e
    return ActivityFacets(
        modules=sorted({m for m, _ in pairs if m}),
        sub_modules=sorted({s for _, s in pairs if s}),
    )


def _resolve_user_name(db: Session, user_id: int | None, user_name: str | None) -> str:
    if user_name and user_name.strip():
        return user_name.strip()
    if user_id is not None:
        user = db.get(AdminUser, user_id)
        if user and user.name:
            return user.name
    raise InvalidArgument("activity log entry needs a user name (none given and none found for user_id)")


def record_activity(
    db: Session,
    *,
    module: str,
    sub_module: str,
    action: str | ActivityAction,
    user_id: int | None = None,
    user_name: str | None = None,
    restaurant_name: str | None = None,
    description: str | None = None,
    target_name: str | None = None,
) -> ActivityLog:
    if not module or not module.strip():
        raise InvalidArgument("module is required")
    if not sub_module or not sub_module.strip():
        raise InvalidArgument("sub_module is required")

    try:
        entry = ActivityLog(
            user_id=user_id,
            user_name=_resolve_user_name(db, user_id, user_name),
            restaurant_name=restaurant_name,
            module=module.strip(),
            sub_module=sub_module.strip(),
            action=ActivityAction.normalize(action).value,
            target_name=target_name,
            description=description,
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to record activity %s/%s", module, sub_module)
        raise StorageUnavailable("could not record activity") from e

    logger.info(
        "Recorded activity id=%s module=%s sub_module=%s action=%s user=%s",
        entry.id,
        entry.module,
        entry.sub_module,
        entry.action,
        entry.user_name,
    )
    return entry
