from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from config import config
from logger import get_logger

logger = get_logger("auth")

# =====================
# Auth / Security Setup
# =====================
ALGORITHM = "HS256"
ADMIN_SUBJECT = "admin"

# Use pbkdf2_sha256 to avoid external bcrypt dependency issues
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Support providing a precomputed hash; otherwise hash the configured password
ADMIN_PASSWORD_HASH = config.ADMIN_PASSWORD_HASH or pwd_context.hash(config.ADMIN_PASSWORD)

PROTECTED_PREFIXES = ("/admin",)
# Writes that stay public even when API writes are gated
PUBLIC_WRITE_PATHS = ("/api/messages",)
WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    redirect: str = "/admin"


class LoginRequest(BaseModel):
    password: str
    redirect: Optional[str] = None


# =========
# Utilities
# =========

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None


def has_admin_session(request: Request) -> bool:
    token = request.cookies.get(config.ADMIN_COOKIE_NAME)
    if not token:
        return False
    payload = decode_access_token(token)
    return bool(payload) and payload.get("sub") == ADMIN_SUBJECT


def is_protected_path(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


def is_gated_write(method: str, path: str) -> bool:
    if method not in WRITE_METHODS or not path.startswith("/api/"):
        return False
    if path.startswith("/api/auth/"):
        return False
    return not (method == "POST" and path.rstrip("/") in PUBLIC_WRITE_PATHS)


async def admin_gate(request: Request, call_next):
    """Send visitors without an admin cookie from /admin to the login page"""
    path = request.url.path

    if config.ADMIN_GATE_ENABLED and is_protected_path(path) and not has_admin_session(request):
        logger.info(f"Blocked unauthenticated request to {path}")
        return RedirectResponse(
            url=f"{config.LOGIN_PATH}?redirect={quote(path)}",
            status_code=307,
        )

    if config.REQUIRE_ADMIN_FOR_WRITES and is_gated_write(request.method, path) \
            and not has_admin_session(request):
        return JSONResponse(
            status_code=401, content={"error": "Not authenticated", "success": False}
        )

    return await call_next(request)


# ======
# Routes
# ======
router = APIRouter(tags=["auth"])


@router.get("/login")
def login_page(redirect: str = "/admin"):
    return {
        "message": "Admin login required",
        "login_url": "/api/auth/login",
        "redirect": redirect,
    }


@router.post("/api/auth/login", response_model=Token)
def login(data: LoginRequest, response: Response):
    if not verify_password(data.password, ADMIN_PASSWORD_HASH):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(status_code=401, detail="Invalid password")

    token = create_access_token({"sub": ADMIN_SUBJECT, "role": "admin"})
    response.set_cookie(
        key=config.ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="lax",
        path="/",
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info("Admin logged in")
    return Token(access_token=token, redirect=data.redirect or "/admin")


@router.post("/api/auth/logout")
def logout(response: Response):
    response.delete_cookie(key=config.ADMIN_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/api/auth/session")
def session(request: Request):
    return {"authenticated": has_admin_session(request)}
