import logging
from fastapi import APIRouter, Depends, Form, Request
from .errors import InvalidCredentials
from .security import (
    Identity, current_identity, get_store, hash_pw, verify_pw, login_session, clear_session_cookie
)
from .store import AccountStore
from .views import render, redirect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

@router.get("/signup")
def signup_page(request: Request):
    return render(request, "signup.html")

@router.post("/signup")
def signup(name: str = Form(""), password: str = Form(""), store: AccountStore = Depends(get_store)):
    name = name.strip()
    if not name or not password:
        raise InvalidCredentials("Name and password required", redirect_to="/signup")
    account = store.create(name, hash_pw(password))
    resp = redirect("/dashboard", "success", "Account created. $250 credited to your wallet!")
    login_session(resp, account)
    return resp

@router.get("/login")
def login_page(request: Request):
    return render(request, "login.html")

@router.post("/login")
def login(name: str = Form(""), password: str = Form(""), store: AccountStore = Depends(get_store)):
    account = store.find_by_name(name.strip())
    if not account or not password or not verify_pw(password, account.password_hash):
        logger.info("failed login for name=%r", name)
        raise InvalidCredentials()
    resp = redirect("/dashboard")
    login_session(resp, account)
    return resp

@router.get("/logout")
def logout(identity: Identity = Depends(current_identity)):
    resp = redirect("/login")
    clear_session_cookie(resp)
    logger.info("logout account=%s", identity.account_id)
    return resp
