import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from memberhub.auth.deps import get_current_user
from memberhub.db import get_db
from memberhub.models.user import User
from memberhub.schemas.memberships import MessageOut
from memberhub.schemas.users import UserOut, UserUpdateIn
from memberhub.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserOut:
    user = UserService(db).get(user_id)
    return UserOut.model_validate(user, from_attributes=True)

@router.put("/{user_id}", response_model=UserOut)
def modify_user(
    user_id: uuid.UUID,
    payload: UserUpdateIn,
    actor: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserOut:
    user = UserService(db).modify(actor, user_id, payload)
    return UserOut.model_validate(user, from_attributes=True)

@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: uuid.UUID,
    actor: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageOut:
    UserService(db).delete(actor, user_id)
    return MessageOut(detail="user deleted successfully")
