import uuid

from fastapi import APIRouter, Depends, HTTPException

from memberhub.rbac.deps import GroupContext, get_group_context, get_membership_service, require_perm
from memberhub.schemas.memberships import (
    AccessOut,
    InviteIn,
    InviteOut,
    MemberOut,
    MessageOut,
    StatusUpdateIn,
)
from memberhub.services.memberships import MembershipService

router = APIRouter(prefix="/groups/{group_id}/members", tags=["members"])

@router.post("", response_model=InviteOut, status_code=201)
def invite_members(
    group_id: uuid.UUID,
    payload: InviteIn,
    ctx: GroupContext = Depends(require_perm("members:invite")),
    service: MembershipService = Depends(get_membership_service),
) -> InviteOut:
    memberships = service.invite(group_id, [str(e) for e in payload.emails])
    return InviteOut(memberships=memberships)

@router.get("", response_model=list[MemberOut])
def list_members(
    group_id: uuid.UUID,
    ctx: GroupContext = Depends(require_perm("members:read")),
    service: MembershipService = Depends(get_membership_service),
) -> list[MemberOut]:
    return service.list_members(group_id)

@router.get("/me", response_model=AccessOut)
def verify_access(ctx: GroupContext = Depends(get_group_context)) -> AccessOut:
    return ctx.access

@router.put("/{user_id}", response_model=MemberOut)
def update_member_status(
    group_id: uuid.UUID,
    user_id: uuid.UUID,
    payload: StatusUpdateIn,
    ctx: GroupContext = Depends(get_group_context),
    service: MembershipService = Depends(get_membership_service),
) -> MemberOut:
    # members may answer their own invite
    if ctx.user.id != user_id and not ctx.allows("members:update"):
        raise HTTPException(status_code=403, detail="forbidden")
    return service.update_status(group_id, user_id, payload.is_accepted)

@router.delete("/{member}", response_model=MessageOut)
def remove_member(
    group_id: uuid.UUID,
    member: str,
    ctx: GroupContext = Depends(get_group_context),
    service: MembershipService = Depends(get_membership_service),
) -> MessageOut:
    is_self = member in (str(ctx.user.id), ctx.user.email)
    if not is_self and not ctx.allows("members:remove"):
        raise HTTPException(status_code=403, detail="forbidden")
    return MessageOut(detail=service.remove(group_id, member))
