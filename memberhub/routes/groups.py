import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from memberhub.auth.deps import get_current_user
from memberhub.db import get_db
from memberhub.models.user import User
from memberhub.rbac.deps import GroupContext, require_perm
from memberhub.schemas.groups import GroupCreateIn, GroupOut
from memberhub.schemas.memberships import MessageOut
from memberhub.services.groups import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])

@router.post("", response_model=GroupOut, status_code=201)
def create_group(
    payload: GroupCreateIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> GroupOut:
    group = GroupService(db).create(user, payload.name)
    return GroupOut.model_validate(group, from_attributes=True)

@router.get("", response_model=list[GroupOut])
def list_groups(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[GroupOut]:
    groups = GroupService(db).list_for_user(user)
    return [GroupOut.model_validate(g, from_attributes=True) for g in groups]

@router.get("/{group_id}", response_model=GroupOut)
def get_group(
    group_id: uuid.UUID,
    ctx: GroupContext = Depends(require_perm("group:read")),
    db: Session = Depends(get_db),
) -> GroupOut:
    group = GroupService(db).get(group_id)
    return GroupOut.model_validate(group, from_attributes=True)

@router.delete("/{group_id}", response_model=MessageOut)
def delete_group(
    group_id: uuid.UUID,
    ctx: GroupContext = Depends(require_perm("group:delete")),
    db: Session = Depends(get_db),
) -> MessageOut:
    GroupService(db).delete(group_id)
    return MessageOut(detail="group deleted successfully")
