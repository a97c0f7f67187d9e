from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

import bcrypt
from jose import jwt

from restro_admin.core.config import settings


def hash_password(plain: str) -> str:
    if not plain or len(plain) < 6:
        raise ValueError("Password too short")
    hashed = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


@dataclass(frozen=True)
class JwtPayload:
    sub: str
    email: str
    exp: int


def create_access_token(*, subject: str, email: str) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    exp = now + dt.timedelta(minutes=settings.jwt_expires_minutes)
    payload = {"sub": subject, "email": email, "exp": int(exp.timestamp())}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> JwtPayload:
    data = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    return JwtPayload(sub=str(data["sub"]), email=str(data.get("email", "")), exp=int(data["exp"]))
