from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from restro_admin.api.deps import get_optional_admin, require_auth
from restro_admin.core.config import settings
from restro_admin.core.security import create_access_token
from restro_admin.db.session import get_db
from restro_admin.models.enums import ActivityAction
from restro_admin.models.user import AdminUser
from restro_admin.schemas.auth import AdminOut, LoginRequest
from restro_admin.services.activity_log import StorageUnavailable, record_activity
from restro_admin.services.users import authenticate_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_session_event(db: Session, admin: AdminUser, description: str) -> None:
    # Session bookkeeping must not block login/logout.
    try:
        record_activity(
            db,
            module="Auth",
            sub_module="Session",
            action=ActivityAction.OTHER,
            user_id=admin.id,
            user_name=admin.name,
            description=description,
        )
    except StorageUnavailable:
        logger.warning("Could not record %s for admin id=%s", description, admin.id)


@router.post("/login", response_model=AdminOut)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, payload.email, payload.password)
    token = create_access_token(subject=str(admin.id), email=admin.email)
    response.set_cookie(
        settings.jwt_cookie_name,
        token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="none" if settings.environment == "production" else "lax",
        max_age=settings.jwt_expires_minutes * 60,
        path="/",
    )
    _record_session_event(db, admin, "login")
    return AdminOut.model_validate(admin)


@router.post("/logout")
def logout(response: Response, db: Session = Depends(get_db), admin: AdminUser | None = Depends(get_optional_admin)):
    if admin is not None:
        _record_session_event(db, admin, "logout")
    response.delete_cookie(settings.jwt_cookie_name, path="/")
    return {"ok": True}


@router.get("/me", response_model=AdminOut)
def me(admin=Depends(require_auth)):
    return AdminOut.model_validate(admin)
