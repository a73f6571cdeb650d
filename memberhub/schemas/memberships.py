import uuid
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, EmailStr, Field

from memberhub.models.membership import Membership, ResolvedUser
from memberhub.models.user import User

class UserSubjectOut(BaseModel):
    kind: Literal["user"] = "user"
    user_id: uuid.UUID
    username: str | None = None
    email: str | None = None

class InviteSubjectOut(BaseModel):
    kind: Literal["invite"] = "invite"
    email: str

SubjectOut = Annotated[UserSubjectOut | InviteSubjectOut, Field(discriminator="kind")]

class MemberOut(BaseModel):
    id: uuid.UUID
    group_id: uuid.UUID
    subject: SubjectOut
    is_accepted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, m: Membership, user: User | None = None) -> "MemberOut":
        subject = m.subject
        if isinstance(subject, ResolvedUser):
            out_subject: UserSubjectOut | InviteSubjectOut = UserSubjectOut(
                user_id=subject.user_id,
                username=user.username if user else None,
                email=user.email if user else None,
            )
        else:
            out_subject = InviteSubjectOut(email=subject.email)
        return cls(
            id=m.id,
            group_id=m.group_id,
            subject=out_subject,
            is_accepted=m.is_accepted,
            created_at=m.created_at,
            updated_at=m.updated_at,
        )

class InviteIn(BaseModel):
    emails: list[EmailStr] = Field(min_length=1)

class InviteOut(BaseModel):
    memberships: list[MemberOut]

class StatusUpdateIn(BaseModel):
    is_accepted: bool

class AccessOut(BaseModel):
    is_member: bool
    is_owner: bool

class MessageOut(BaseModel):
    detail: str
