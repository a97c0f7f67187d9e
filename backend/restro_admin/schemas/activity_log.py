from __future__ import annotations

import datetime as dt

from restro_admin.schemas.common import ApiModel


class ActivityLogOut(ApiModel):
    id: int
    user_id: int | None
    user_name: str
    restaurant_name: str | None
    module: str
    sub_module: str
    action: str
    target_name: str | None
    description: str | None
    timestamp: dt.datetime


class ActivityLogPageOut(ApiModel):
    entries: list[ActivityLogOut]
    total_count: int
    page: int  # 1-based, as sent by the client
    limit: int
    total_pages: int


class ActivityFacetsOut(ApiModel):
    modules: list[str]
    sub_modules: list[str]
