import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from memberhub.models.base import Base

@dataclass(frozen=True)
class ResolvedUser:
    user_id: uuid.UUID

@dataclass(frozen=True)
class PendingInvite:
    email: str

MembershipSubject = ResolvedUser | PendingInvite

class Membership(Base):
    """Links a group to either a user account or a not-yet-registered email.

    Exactly one of ``user_id`` / ``invited_email`` is set; use ``subject``
    rather than reading the columns directly.
    """

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_membership_group_user"),
        UniqueConstraint("group_id", "invited_email", name="uq_membership_group_invited_email"),
        CheckConstraint(
            "(user_id IS NULL) <> (invited_email IS NULL)",
            name="ck_membership_single_subject",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("groups.id"), index=True, nullable=False)

    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), index=True, nullable=True)
    invited_email: Mapped[str | None] = mapped_column(String(320), index=True, nullable=True)

    is_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @classmethod
    def for_subject(cls, group_id: uuid.UUID, subject: MembershipSubject) -> "Membership":
        if isinstance(subject, ResolvedUser):
            return cls(group_id=group_id, user_id=subject.user_id, invited_email=None, is_accepted=False)
        return cls(group_id=group_id, user_id=None, invited_email=subject.email, is_accepted=False)

    @property
    def subject(self) -> MembershipSubject:
        if self.user_id is not None:
            return ResolvedUser(user_id=self.user_id)
        return PendingInvite(email=self.invited_email)
