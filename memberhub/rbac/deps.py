import uuid

from fastapi import Depends, HTTPException
from sqlalchemy.orm import sessionmaker

from memberhub.auth.deps import get_current_user
from memberhub.config import settings
from memberhub.db import get_session_factory
from memberhub.models.enums import GroupRole
from memberhub.models.user import User
from memberhub.rbac.perms import PERMS
from memberhub.schemas.memberships import AccessOut
from memberhub.services.memberships import MembershipService

def get_membership_service(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> MembershipService:
    return MembershipService(session_factory, max_workers=settings.invite_max_workers)

class GroupContext:
    def __init__(self, group_id: uuid.UUID, user: User, access: AccessOut):
        self.group_id = group_id
        self.user = user
        self.access = access

    @property
    def role(self) -> GroupRole:
        return GroupRole.owner if self.access.is_owner else GroupRole.member

    def allows(self, action: str) -> bool:
        return self.role in PERMS[action]

# 404 when the group is missing, 403 when the caller is neither owner nor member
def get_group_context(
    group_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service),
) -> GroupContext:
    access = service.verify_access(group_id, user.id)
    return GroupContext(group_id=group_id, user=user, access=access)

def require_perm(action: str):
    if action not in PERMS:
        raise RuntimeError(f"unknown permission action: {action}")

    def _checker(ctx: GroupContext = Depends(get_group_context)) -> GroupContext:
        if not ctx.allows(action):
            raise HTTPException(status_code=403, detail="forbidden")
        return ctx

    return _checker
