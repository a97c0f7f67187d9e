from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError
from sqlalchemy.orm import Session

from restro_admin.core.config import settings
from restro_admin.core.security import decode_access_token
from restro_admin.db.session import get_db
from restro_admin.models.user import AdminUser


def _token_from_request(request: Request) -> str | None:
    token = request.cookies.get(settings.jwt_cookie_name)
    if token:
        return token
    auth = request.headers.get("Authorization") or ""
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def _load_admin(db: Session, token: str) -> AdminUser | None:
    try:
        payload = decode_access_token(token)
        admin_id = int(payload.sub)
    except (JWTError, KeyError, ValueError):
        return None
    admin = db.get(AdminUser, admin_id)
    if not admin or not admin.is_active:
        return None
    return admin


def get_current_admin(request: Request, db: Session = Depends(get_db)) -> AdminUser:
    token = _token_from_request(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied. No token provided.")
    admin = _load_admin(db, token)
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")
    return admin


def require_auth(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
    return admin


def get_optional_admin(request: Request, db: Session = Depends(get_db)) -> AdminUser | None:
    """
    Best-effort auth: the admin if a valid token is present, otherwise None.
    Used by logout, which must stay idempotent.
    """
    token = _token_from_request(request)
    if not token:
        return None
    return _load_admin(db, token)
