import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from memberhub.auth.passwords import hash_password
from memberhub.db import SessionLocal
from memberhub.models.enums import Role
from memberhub.models.group import Group
from memberhub.models.membership import Membership, MembershipSubject, PendingInvite, ResolvedUser
from memberhub.models.user import User
from memberhub.stores import MembershipStore, UserStore

SEED_PASSWORD = "password123"

@dataclass
class SeedResult:
    owner_email: str
    member_email: str
    invited_email: str
    group_id: uuid.UUID

def get_or_create_user(db: Session, email: str, username: str, role: Role = Role.user) -> User:
    users = UserStore(db)
    u = users.get_by_email(email)
    if u is None:
        u = users.create(email=email, username=username, password_hash=hash_password(SEED_PASSWORD), role=role)
    return u

def get_or_create_group(db: Session, name: str, owner_id: uuid.UUID) -> Group:
    g = db.scalar(select(Group).where(Group.name == name, Group.owner_id == owner_id))
    if g is None:
        g = Group(name=name, owner_id=owner_id)
        db.add(g)
        db.flush()
    return g

def get_or_create_membership(db: Session, group_id: uuid.UUID, subject: MembershipSubject, accepted: bool) -> Membership:
    store = MembershipStore(db)
    m = store.find(group_id, subject)
    if m is None:
        m = Membership.for_subject(group_id, subject)
        db.add(m)
    # keep it stable if you re-run seed
    m.is_accepted = accepted
    db.flush()
    return m

def seed() -> SeedResult:
    db = SessionLocal()
    try:
        owner = get_or_create_user(db, "owner@example.com", "owner")
        member = get_or_create_user(db, "member@example.com", "member")
        invited_email = "invited@example.com"

        group = get_or_create_group(db, "seeded group", owner.id)

        get_or_create_membership(db, group.id, ResolvedUser(user_id=member.id), accepted=True)
        get_or_create_membership(db, group.id, PendingInvite(email=invited_email), accepted=False)

        db.commit()

        return SeedResult(
            owner_email=owner.email,
            member_email=member.email,
            invited_email=invited_email,
            group_id=group.id,
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"group_id={r.group_id}")
    print(f"users (password {SEED_PASSWORD!r}):")
    print(f"  owner:   {r.owner_email}")
    print(f"  member:  {r.member_email}")
    print(f"invited:   {r.invited_email}")
