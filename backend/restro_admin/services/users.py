from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from restro_admin.core.security import hash_password, verify_password
from restro_admin.models.user import AdminUser


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate_admin(db: Session, email: str, password: str) -> AdminUser:
    admin = db.query(AdminUser).filter(AdminUser.email == _normalize_email(email)).first()
    if not admin or not admin.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not verify_password(password, admin.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return admin


def create_admin(db: Session, *, name: str, email: str, password: str) -> AdminUser:
    exists = db.query(AdminUser).filter(AdminUser.email == _normalize_email(email)).first()
    if exists:
        return exists
    admin = AdminUser(name=name, email=_normalize_email(email), password_hash=hash_password(password))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin
