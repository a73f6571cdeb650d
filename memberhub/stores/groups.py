import uuid

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from memberhub.models.group import Group
from memberhub.models.membership import Membership

class GroupStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, group_id: uuid.UUID) -> Group | None:
        return self.db.get(Group, group_id)

    def create(self, name: str, owner_id: uuid.UUID) -> Group:
        group = Group(name=name, owner_id=owner_id)
        self.db.add(group)
        self.db.flush()
        return group

    def list_for_user(self, user_id: uuid.UUID) -> list[Group]:
        member_of = select(Membership.group_id).where(Membership.user_id == user_id)
        q = (
            select(Group)
            .where(or_(Group.owner_id == user_id, Group.id.in_(member_of)))
            .order_by(Group.created_at.desc())
        )
        return list(self.db.scalars(q).all())

    def list_owned(self, user_id: uuid.UUID) -> list[Group]:
        return list(self.db.scalars(select(Group).where(Group.owner_id == user_id)).all())

    def delete(self, group: Group) -> None:
        self.db.delete(group)
        self.db.flush()
