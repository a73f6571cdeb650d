import uuid

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from memberhub.auth.tokens import decode_access_token
from memberhub.db import get_db
from memberhub.models.user import User
from memberhub.stores import UserStore

bearer = HTTPBearer(auto_error=False)

def _token_user_id(token: str) -> uuid.UUID:
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="invalid token")

    try:
        return uuid.UUID(payload["sub"])
    except (KeyError, ValueError):
        raise HTTPException(status_code=401, detail="invalid token subject")

def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if creds is None or creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="missing bearer token")

    # a token outlives a deleted account
    user = UserStore(db).get(_token_user_id(creds.credentials))
    if user is None:
        raise HTTPException(status_code=401, detail="account no longer exists")

    return user
