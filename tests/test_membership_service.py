import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from memberhub.errors import ForbiddenError, NotFoundError, PartialInviteFailure
from memberhub.models.group import Group
from memberhub.models.membership import Membership, PendingInvite, ResolvedUser
from memberhub.models.user import User
from memberhub.stores import DuplicateMembership, GroupStore, MembershipStore, UserStore

def make_user(db: Session, email: str, username: str = "u") -> User:
    user = UserStore(db).create(email=email, username=username, password_hash="not-a-real-hash")
    db.commit()
    return user

def make_group(db: Session, owner: User, name: str = "g") -> Group:
    group = GroupStore(db).create(name=name, owner_id=owner.id)
    db.commit()
    return group

def count_memberships(db: Session, group_id: uuid.UUID, **where) -> int:
    q = select(func.count()).select_from(Membership).where(Membership.group_id == group_id)
    for col, value in where.items():
        q = q.where(getattr(Membership, col) == value)
    db.expire_all()
    return db.scalar(q) or 0

@pytest.fixture()
def owner(db_session) -> User:
    return make_user(db_session, "owner@example.com", "owner")

@pytest.fixture()
def group(db_session, owner) -> Group:
    return make_group(db_session, owner)

def test_invite_unknown_email_creates_pending_invite(service, db_session, group):
    created = service.invite(group.id, ["new@example.com"])

    assert len(created) == 1
    assert created[0].subject.kind == "invite"
    assert created[0].subject.email == "new@example.com"
    assert created[0].is_accepted is False

    m = MembershipStore(db_session).find(group.id, PendingInvite(email="new@example.com"))
    assert m is not None
    assert m.is_accepted is False
    assert m.user_id is None
    assert count_memberships(db_session, group.id, invited_email="new@example.com") == 1

def test_invite_registered_user_links_account(service, db_session, group):
    user = make_user(db_session, "known@example.com", "known")

    created = service.invite(group.id, ["Known@Example.com "])

    assert len(created) == 1
    assert created[0].subject.kind == "user"
    assert created[0].subject.user_id == user.id
    assert created[0].subject.email == "known@example.com"
    assert count_memberships(db_session, group.id, user_id=user.id) == 1

def test_invite_same_email_twice_reports_already_invited(service, db_session, group):
    service.invite(group.id, ["twice@example.com"])

    with pytest.raises(PartialInviteFailure) as exc:
        service.invite(group.id, ["twice@example.com"])

    assert exc.value.errors == [{"email": "twice@example.com", "message": "user is already a member or invited"}]
    assert count_memberships(db_session, group.id, invited_email="twice@example.com") == 1

def test_invite_existing_member_message_names_email(service, db_session, group):
    user = make_user(db_session, "member@example.com")
    service.invite(group.id, ["member@example.com"])

    with pytest.raises(PartialInviteFailure) as exc:
        service.invite(group.id, ["member@example.com"])

    assert len(exc.value.errors) == 1
    assert exc.value.errors[0]["email"] == "member@example.com"
    assert "member@example.com" in exc.value.errors[0]["message"]
    assert count_memberships(db_session, group.id, user_id=user.id) == 1

def test_partial_failure_keeps_memberships_created_in_same_batch(service, db_session, group):
    # current behavior: no rollback of the successful invitees
    service.invite(group.id, ["b@x.com"])

    with pytest.raises(PartialInviteFailure) as exc:
        service.invite(group.id, ["a@x.com", "b@x.com"])

    assert [e["email"] for e in exc.value.errors] == ["b@x.com"]
    assert count_memberships(db_session, group.id, invited_email="a@x.com") == 1
    assert count_memberships(db_session, group.id, invited_email="b@x.com") == 1

def test_duplicate_email_within_one_batch_creates_one_membership(service, db_session, group):
    with pytest.raises(PartialInviteFailure) as exc:
        service.invite(group.id, ["dup@example.com", "dup@example.com"])

    assert [e["email"] for e in exc.value.errors] == ["dup@example.com"]
    assert count_memberships(db_session, group.id, invited_email="dup@example.com") == 1

def test_batch_returns_one_membership_per_email(service, db_session, group):
    emails = [f"user{i}@example.com" for i in range(10)]

    created = service.invite(group.id, emails)

    assert sorted(m.subject.email for m in created) == sorted(emails)
    assert count_memberships(db_session, group.id) == 10

def test_invite_unknown_group_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.invite(uuid.uuid4(), ["x@example.com"])

def test_update_status_updates_in_place(service, db_session, group):
    user = make_user(db_session, "accept@example.com")
    created = service.invite(group.id, ["accept@example.com"])

    updated = service.update_status(group.id, user.id, True)

    assert updated.id == created[0].id
    assert updated.is_accepted is True
    assert count_memberships(db_session, group.id, user_id=user.id) == 1

    m = MembershipStore(db_session).find(group.id, ResolvedUser(user_id=user.id))
    assert m.is_accepted is True

def test_update_status_missing_membership(service, db_session, group):
    user = make_user(db_session, "stranger@example.com")

    with pytest.raises(NotFoundError):
        service.update_status(group.id, user.id, True)

    with pytest.raises(NotFoundError):
        service.update_status(uuid.uuid4(), user.id, True)

def test_remove_invite_by_email(service, db_session, group):
    service.invite(group.id, ["gone@example.com", "stays@example.com"])

    assert service.remove(group.id, "gone@example.com") == "invite successfully removed"
    assert count_memberships(db_session, group.id, invited_email="gone@example.com") == 0
    assert count_memberships(db_session, group.id, invited_email="stays@example.com") == 1

def test_remove_invite_only_touches_the_given_group(service, db_session, owner, group):
    other = make_group(db_session, owner, "other")
    service.invite(group.id, ["shared@example.com"])
    service.invite(other.id, ["shared@example.com"])

    service.remove(group.id, "shared@example.com")

    assert count_memberships(db_session, group.id, invited_email="shared@example.com") == 0
    assert count_memberships(db_session, other.id, invited_email="shared@example.com") == 1

def test_remove_member_by_user_id(service, db_session, group):
    user = make_user(db_session, "leaver@example.com")
    service.invite(group.id, ["leaver@example.com"])

    assert service.remove(group.id, str(user.id)) == "member successfully removed"
    assert count_memberships(db_session, group.id, user_id=user.id) == 0

def test_remove_missing_membership_is_idempotent(service, group):
    assert service.remove(group.id, str(uuid.uuid4())) == "member successfully removed"
    assert service.remove(group.id, "nobody@example.com") == "member successfully removed"

def test_remove_unknown_group_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.remove(uuid.uuid4(), "x@example.com")

def test_verify_access(service, db_session, owner, group):
    member = make_user(db_session, "m@example.com")
    outsider = make_user(db_session, "o@example.com")
    service.invite(group.id, ["m@example.com"])

    assert service.verify_access(group.id, owner.id).model_dump() == {"is_member": True, "is_owner": True}
    # acceptance is not required to count as a member
    assert service.verify_access(group.id, member.id).model_dump() == {"is_member": True, "is_owner": False}

    with pytest.raises(ForbiddenError):
        service.verify_access(group.id, outsider.id)

    with pytest.raises(NotFoundError):
        service.verify_access(uuid.uuid4(), owner.id)

def test_list_members_expands_users(service, db_session, group):
    make_user(db_session, "listed@example.com", "listed")
    service.invite(group.id, ["listed@example.com", "pending@example.com"])

    members = service.list_members(group.id)

    by_kind = {m.subject.kind: m.subject for m in members}
    assert by_kind["user"].username == "listed"
    assert by_kind["user"].email == "listed@example.com"
    assert by_kind["invite"].email == "pending@example.com"

    with pytest.raises(NotFoundError):
        service.list_members(uuid.uuid4())

def test_remove_registered_member_by_email(service, db_session, group):
    user = make_user(db_session, "byemail@example.com")
    service.invite(group.id, ["byemail@example.com"])

    assert service.remove(group.id, "ByEmail@example.com") == "member successfully removed"
    assert count_memberships(db_session, group.id, user_id=user.id) == 0

def test_create_only_maps_unique_violations_to_duplicates(db_session):
    # unknown group: a foreign key failure, not an existing invite
    with pytest.raises(IntegrityError):
        MembershipStore(db_session).create(uuid.uuid4(), PendingInvite(email="fk@example.com"))

def test_create_reports_duplicate_subject(db_session, group):
    store = MembershipStore(db_session)
    store.create(group.id, PendingInvite(email="once@example.com"))

    with pytest.raises(DuplicateMembership):
        store.create(group.id, PendingInvite(email="once@example.com"))
