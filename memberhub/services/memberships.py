"""Group membership operations: batch invite, acceptance, removal, access."""

from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session, sessionmaker

from memberhub.auth.tokens import now_utc
from memberhub.errors import ForbiddenError, NotFoundError, PartialInviteFailure
from memberhub.models.group import Group
from memberhub.models.membership import PendingInvite, ResolvedUser
from memberhub.schemas.memberships import AccessOut, MemberOut
from memberhub.stores import DuplicateMembership, GroupStore, MembershipStore, UserStore
from memberhub.stores.users import normalize_email

logger = logging.getLogger(__name__)

class InviteStatus(str, Enum):
    created = "created"
    already_invited_or_member = "already_invited_or_member"

@dataclass
class InviteOutcome:
    email: str
    status: InviteStatus
    membership: MemberOut | None = None
    message: str | None = None

    @property
    def failed(self) -> bool:
        return self.status is InviteStatus.already_invited_or_member

class MembershipService:
    """Each operation opens its own session(s) from ``session_factory``.

    Batch invite resolves every email on its own worker thread with its own
    session, so the invitees of one call never share a transaction.
    """

    def __init__(self, session_factory: sessionmaker, max_workers: int = 8):
        self._session_factory = session_factory
        self._max_workers = max(1, max_workers)

    def _require_group(self, db: Session, group_id: uuid.UUID) -> Group:
        group = GroupStore(db).get(group_id)
        if group is None:
            raise NotFoundError("group not found")
        return group

    def invite(self, group_id: uuid.UUID, emails: list[str]) -> list[MemberOut]:
        with self._session_factory() as db:
            self._require_group(db, group_id)

        if not emails:
            return []

        workers = min(self._max_workers, len(emails))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="invite") as pool:
            # map keeps input order: one outcome per email
            outcomes = list(pool.map(lambda email: self._invite_one(group_id, email), emails))

        errors = [{"email": o.email, "message": o.message or ""} for o in outcomes if o.failed]
        if errors:
            # memberships created for the other emails are kept
            logger.warning(
                "invite to group %s: %d of %d emails already invited or members",
                group_id,
                len(errors),
                len(outcomes),
            )
            raise PartialInviteFailure(errors)

        return [o.membership for o in outcomes if o.membership is not None]

    def _invite_one(self, group_id: uuid.UUID, email: str) -> InviteOutcome:
        email = normalize_email(email)
        with self._session_factory() as db:
            memberships = MembershipStore(db)
            user = UserStore(db).get_by_email(email)

            if user is None:
                subject: ResolvedUser | PendingInvite = PendingInvite(email=email)
                duplicate_message = "user is already a member or invited"
            else:
                email = user.email
                subject = ResolvedUser(user_id=user.id)
                duplicate_message = f"{user.email} is already invited to this group"

            if memberships.find(group_id, subject) is not None:
                return InviteOutcome(email, InviteStatus.already_invited_or_member, message=duplicate_message)

            try:
                m = memberships.create(group_id, subject)
            except DuplicateMembership:
                # lost the race against a concurrent invite for the same subject
                return InviteOutcome(email, InviteStatus.already_invited_or_member, message=duplicate_message)

            logger.debug("invited %s to group %s (membership %s)", email, group_id, m.id)
            return InviteOutcome(email, InviteStatus.created, membership=MemberOut.from_row(m, user))

    def list_members(self, group_id: uuid.UUID) -> list[MemberOut]:
        with self._session_factory() as db:
            self._require_group(db, group_id)
            rows = MembershipStore(db).list_for_group(group_id)
            return [MemberOut.from_row(m, u) for m, u in rows]

    def update_status(self, group_id: uuid.UUID, user_id: uuid.UUID, is_accepted: bool) -> MemberOut:
        with self._session_factory() as db:
            self._require_group(db, group_id)
            memberships = MembershipStore(db)

            m = memberships.find(group_id, ResolvedUser(user_id=user_id))
            if m is None:
                raise NotFoundError("member not found in this group")

            m.is_accepted = is_accepted
            m.updated_at = now_utc()
            m = memberships.save(m)
            return MemberOut.from_row(m, UserStore(db).get(user_id))

    def remove(self, group_id: uuid.UUID, member: str) -> str:
        """Remove an invite or a member, identified by email or user id.

        An email first matches a pending invite, then a registered user's
        membership. Removing a membership that does not exist is not an error.
        """
        with self._session_factory() as db:
            self._require_group(db, group_id)
            memberships = MembershipStore(db)

            if memberships.delete_invite(group_id, normalize_email(member)):
                return "invite successfully removed"

            try:
                user_id: uuid.UUID | None = uuid.UUID(member)
            except ValueError:
                user = UserStore(db).get_by_email(member)
                user_id = user.id if user is not None else None

            if user_id is not None:
                memberships.delete_for_user(group_id, user_id)
            return "member successfully removed"

    def verify_access(self, group_id: uuid.UUID, user_id: uuid.UUID) -> AccessOut:
        with self._session_factory() as db:
            group = self._require_group(db, group_id)

            if group.owner_id == user_id:
                return AccessOut(is_member=True, is_owner=True)

            if MembershipStore(db).find(group_id, ResolvedUser(user_id=user_id)) is not None:
                return AccessOut(is_member=True, is_owner=False)

        raise ForbiddenError("access denied: user is neither a member nor the owner")
