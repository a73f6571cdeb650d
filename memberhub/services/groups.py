import logging
import uuid

from sqlalchemy.orm import Session

from memberhub.errors import NotFoundError
from memberhub.models.group import Group
from memberhub.models.user import User
from memberhub.stores import GroupStore, MembershipStore

logger = logging.getLogger(__name__)

class GroupService:
    def __init__(self, db: Session):
        self.db = db
        self.groups = GroupStore(db)

    def create(self, owner: User, name: str) -> Group:
        group = self.groups.create(name=name, owner_id=owner.id)
        self.db.commit()
        self.db.refresh(group)
        return group

    def list_for_user(self, user: User) -> list[Group]:
        return self.groups.list_for_user(user.id)

    def get(self, group_id: uuid.UUID) -> Group:
        group = self.groups.get(group_id)
        if group is None:
            raise NotFoundError("group not found")
        return group

    def delete(self, group_id: uuid.UUID) -> None:
        group = self.get(group_id)
        MembershipStore(self.db).delete_all_for_group(group.id)
        self.groups.delete(group)
        self.db.commit()
        logger.info("deleted group %s", group_id)
