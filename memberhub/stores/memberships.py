import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from memberhub.models.membership import Membership, MembershipSubject, ResolvedUser
from memberhub.models.user import User

class DuplicateMembership(Exception):
    """Insert rejected by the (group, user) / (group, invited_email) unique constraints."""

class MembershipStore:
    def __init__(self, db: Session):
        self.db = db

    def find(self, group_id: uuid.UUID, subject: MembershipSubject) -> Membership | None:
        q = select(Membership).where(Membership.group_id == group_id)
        if isinstance(subject, ResolvedUser):
            q = q.where(Membership.user_id == subject.user_id)
        else:
            q = q.where(Membership.invited_email == subject.email)
        return self.db.scalar(q)

    def create(self, group_id: uuid.UUID, subject: MembershipSubject) -> Membership:
        m = Membership.for_subject(group_id, subject)
        self.db.add(m)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # only a row for the same subject makes this a duplicate; fk and
            # check violations propagate
            if self.find(group_id, subject) is None:
                raise
            raise DuplicateMembership(str(subject))
        self.db.refresh(m)
        return m

    def save(self, m: Membership) -> Membership:
        self.db.add(m)
        self.db.commit()
        self.db.refresh(m)
        return m

    def list_for_group(self, group_id: uuid.UUID) -> list[tuple[Membership, User | None]]:
        q = (
            select(Membership, User)
            .outerjoin(User, User.id == Membership.user_id)
            .where(Membership.group_id == group_id)
            .order_by(Membership.created_at)
        )
        return [(m, u) for m, u in self.db.execute(q).all()]

    def delete_invite(self, group_id: uuid.UUID, email: str) -> bool:
        stmt = delete(Membership).where(
            Membership.group_id == group_id,
            Membership.invited_email == email,
        )
        deleted = self.db.execute(stmt).rowcount
        self.db.commit()
        return bool(deleted)

    def delete_for_user(self, group_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = delete(Membership).where(
            Membership.group_id == group_id,
            Membership.user_id == user_id,
        )
        deleted = self.db.execute(stmt).rowcount
        self.db.commit()
        return bool(deleted)

    def delete_all_for_group(self, group_id: uuid.UUID) -> None:
        self.db.execute(delete(Membership).where(Membership.group_id == group_id))

    def delete_all_for_user(self, user_id: uuid.UUID) -> None:
        self.db.execute(delete(Membership).where(Membership.user_id == user_id))

    # pending invites become the account's memberships; an invite to a group
    # the user already belongs to is dropped instead
    def claim_invites(self, email: str, user_id: uuid.UUID) -> int:
        already_in = select(Membership.group_id).where(Membership.user_id == user_id)
        self.db.execute(
            delete(Membership)
            .where(Membership.invited_email == email, Membership.group_id.in_(already_in))
            .execution_options(synchronize_session=False)
        )
        stmt = (
            update(Membership)
            .where(Membership.invited_email == email)
            .values(user_id=user_id, invited_email=None)
        )
        return self.db.execute(stmt).rowcount

