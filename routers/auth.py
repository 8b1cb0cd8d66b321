import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from authx import AuthX, AuthXConfig, TokenPayload
from core.config import settings
from core.database import get_db
from core.errors import InvalidInputError
from schemas.auth import LoginIn, Principal, SignupIn, UserOut, first_error_message
from services.auth_services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

_cookie_samesite = settings.JWT_COOKIE_SAMESITE.lower() if settings.JWT_COOKIE_SAMESITE else None
_cookie_domain = settings.JWT_COOKIE_DOMAIN or None

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    JWT_TOKEN_LOCATION=["cookies"],
    JWT_ACCESS_COOKIE_NAME=settings.JWT_ACCESS_COOKIE_NAME,
    JWT_COOKIE_SAMESITE=_cookie_samesite or "lax",
    JWT_COOKIE_SECURE=settings.JWT_COOKIE_SECURE,
    JWT_COOKIE_DOMAIN=_cookie_domain,
    JWT_COOKIE_CSRF_PROTECT=settings.JWT_COOKIE_CSRF_PROTECT,
)

security = AuthX(config=config)


def _decode_token(token: str) -> TokenPayload:
    return TokenPayload.decode(
        token=token,
        key=security.config.public_key,
        algorithms=[security.config.JWT_ALGORITHM],
    )


def current_principal(payload: TokenPayload = Depends(security.access_token_required)) -> Principal:
    try:
        return Principal(id=int(payload.sub))
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject in token") from exc


def optional_principal(request: Request) -> Principal | None:
    """Principal for page rendering; None instead of 401 when the cookie is missing or bad."""
    token = request.cookies.get(settings.JWT_ACCESS_COOKIE_NAME)
    if not token:
        return None
    try:
        payload = _decode_token(token)
        return Principal(id=int(payload.sub))
    except Exception as exc:
        logger.debug("Ignoring unusable session cookie: %s", exc)
        return None


def _start_session(response: Response, user_id: int) -> None:
    access_token = security.create_access_token(uid=str(user_id))
    security.set_access_cookies(access_token, response)


@router.post("/signup")
async def signup(
    response: Response,
    email: str = Form(""),
    password: str = Form(""),
    name: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        data = SignupIn(email=email, password=password, name=name)
    except ValidationError as exc:
        raise InvalidInputError(first_error_message(exc)) from exc

    user = AuthService(db).register(email=data.email, name=data.name, password=data.password)
    logger.info("Registered user %s", user.id)
    _start_session(response, user.id)
    return {"success": True}


@router.post("/login")
async def login(
    response: Response,
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        data = LoginIn(email=email, password=password)
    except ValidationError as exc:
        raise InvalidInputError(first_error_message(exc)) from exc

    user = AuthService(db).login(email=data.email, password=data.password)
    _start_session(response, user.id)
    return {"success": True}


@router.post("/logout")
async def logout(response: Response):
    security.unset_cookies(response)
    response.delete_cookie(
        settings.JWT_ACCESS_COOKIE_NAME,
        path="/",
        domain=_cookie_domain,
        httponly=True,
        samesite=_cookie_samesite or "lax",
        secure=settings.JWT_COOKIE_SECURE,
    )
    return {"success": True}


@router.get("/me", response_model=UserOut)
async def me(
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    user = AuthService(db).get_user(principal.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return UserOut(id=user.id, email=user.email, name=user.name)
