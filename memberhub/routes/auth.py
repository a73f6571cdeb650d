from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from memberhub.auth.tokens import issue_access_token
from memberhub.config import settings
from memberhub.db import get_db
from memberhub.ratelimit import rate_limit
from memberhub.schemas.auth import AccessTokenOut, LoginIn, RegisterIn
from memberhub.schemas.users import UserOut
from memberhub.services.users import UserService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_auth_register_per_min,
            window_seconds=60,
        )
    ),
) -> UserOut:
    user = UserService(db).register(payload.email, payload.username, payload.password)
    return UserOut.model_validate(user, from_attributes=True)

@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_auth_login_per_min,
            window_seconds=60,
        )
    ),
) -> AccessTokenOut:
    user = UserService(db).authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=400, detail="invalid email or password")

    token = issue_access_token(user.id, user.email, user.role.value)
    return AccessTokenOut(access_token=token, user_id=user.id)
