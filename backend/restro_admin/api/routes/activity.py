"""Activity log API."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from restro_admin.api.deps import require_auth
from restro_admin.core.config import settings
from restro_admin.db.session import get_db
from restro_admin.schemas.activity_log import ActivityFacetsOut, ActivityLogOut, ActivityLogPageOut
from restro_admin.services import activity_log as activity_service

router = APIRouter()


@router.get("/", response_model=ActivityLogPageOut)
def list_activity_logs(
    module: str | None = Query(default=None),
    sub_module: str | None = Query(default=None, alias="subModule"),
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    # Bounds are checked by the service so bad paging reaches the client as InvalidArgument.
    limit = settings.activity_log_default_page_size if limit is None else limit
    try:
        result = activity_service.list_entries(
            db,
            activity_service.ActivityFilters(module=module, sub_module=sub_module),
            activity_service.PageRequest(index=page - 1, size=limit),
        )
    except activity_service.InvalidArgument as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except activity_service.StorageUnavailable:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Error fetching activity logs")

    return ActivityLogPageOut(
        entries=[ActivityLogOut.model_validate(e) for e in result.entries],
        total_count=result.total_count,
        page=page,
        limit=limit,
        total_pages=math.ceil(result.total_count / limit),
    )


@router.get("/filters", response_model=ActivityFacetsOut)
def get_activity_filters(db: Session = Depends(get_db), _=Depends(require_auth)):
    try:
        facets = activity_service.list_facets(db)
    except activity_service.StorageUnavailable:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Error fetching filter options")
    return ActivityFacetsOut(modules=facets.modules, sub_modules=facets.sub_modules)
