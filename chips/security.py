import datetime as dt
from dataclasses import dataclass
from typing import Optional, Tuple
from jose import jwt, JWTError
from fastapi import Depends, Request, Response
from passlib.hash import bcrypt
from sqlalchemy.orm import Session
from .db import SessionLocal
from .errors import Unauthenticated
from .settings import SESSION_SECRET, SECURE_COOKIES, SESSION_MAX_AGE
from .store import AccountStore

JWT_ALG = "HS256"
COOKIE_NAME = "session"
FLASH_COOKIE = "flash"

@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved once per request from the session cookie."""
    account_id: int
    name: str

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)

def hash_pw(pw: str) -> str:
    return bcrypt.hash(pw)

def verify_pw(pw: str, h: str) -> bool:
    return bcrypt.verify(pw, h)

def make_jwt(account_id: int, name: str) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": str(account_id),
        "name": name,
        "iat": int(now.timestamp()),
        "exp": int((now + dt.timedelta(seconds=SESSION_MAX_AGE)).timestamp()),
    }
    return jwt.encode(payload, SESSION_SECRET, algorithm=JWT_ALG)

def _set_cookie(resp: Response, key: str, value: str, max_age: Optional[int] = None):
    # NOTE: secure=True prevents cookies on http://localhost; toggle via SECURE_COOKIES env.
    resp.set_cookie(
        key=key,
        value=value,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="lax",
        max_age=max_age,
        path="/",
    )

def set_session_cookie(resp: Response, token: str):
    _set_cookie(resp, COOKIE_NAME, token, max_age=SESSION_MAX_AGE)

def clear_session_cookie(resp: Response):
    resp.delete_cookie(COOKIE_NAME, path="/")

def login_session(resp: Response, account) -> None:
    set_session_cookie(resp, make_jwt(account.id, account.name))

def current_identity(request: Request) -> Identity:
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise Unauthenticated()
    try:
        data = jwt.decode(token, SESSION_SECRET, algorithms=[JWT_ALG])
        return Identity(account_id=int(data["sub"]), name=data.get("name", ""))
    except (JWTError, KeyError, ValueError):
        raise Unauthenticated() from None

# Flash messages: one (category, message) pair in a signed cookie, shown on the next page.
def flash(resp: Response, category: str, message: str):
    token = jwt.encode({"cat": category, "msg": message}, SESSION_SECRET, algorithm=JWT_ALG)
    _set_cookie(resp, FLASH_COOKIE, token)

def read_flash(request: Request) -> Optional[Tuple[str, str]]:
    token = request.cookies.get(FLASH_COOKIE)
    if not token:
        return None
    try:
        data = jwt.decode(token, SESSION_SECRET, algorithms=[JWT_ALG])
    except JWTError:
        return None
    return data.get("cat", "info"), data.get("msg", "")

def clear_flash(resp: Response):
    resp.delete_cookie(FLASH_COOKIE, path="/")
