from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from memberhub.auth.passwords import hash_password, verify_password
from memberhub.errors import ConflictError, ForbiddenError, NotFoundError
from memberhub.models.enums import Role
from memberhub.models.user import User
from memberhub.schemas.users import UserUpdateIn
from memberhub.stores import GroupStore, MembershipStore, UserStore
from memberhub.stores.users import normalize_email

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserStore(db)

    def register(self, email: str, username: str, password: str) -> User:
        email = normalize_email(email)
        if self.users.get_by_email(email) is not None:
            raise ConflictError("email already used")

        user = self.users.create(email=email, username=username, password_hash=hash_password(password))
        claimed = MembershipStore(self.db).claim_invites(email, user.id)
        self.db.commit()
        self.db.refresh(user)

        if claimed:
            logger.info("user %s claimed %d pending invite(s)", user.id, claimed)
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def get(self, user_id: uuid.UUID) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user

    def _get_for_write(self, actor: User, user_id: uuid.UUID) -> User:
        if actor.id != user_id and actor.role != Role.admin:
            raise ForbiddenError("forbidden")
        return self.get(user_id)

    def modify(self, actor: User, user_id: uuid.UUID, payload: UserUpdateIn) -> User:
        user = self._get_for_write(actor, user_id)

        if payload.email is not None:
            email = normalize_email(payload.email)
            other = self.users.get_by_email(email)
            if other is not None and other.id != user.id:
                raise ConflictError("email already used")
            if email != user.email:
                user.email = email
                claimed = MembershipStore(self.db).claim_invites(email, user.id)
                if claimed:
                    logger.info("user %s claimed %d pending invite(s) after email change", user.id, claimed)
        if payload.username is not None:
            user.username = payload.username
        if payload.password is not None:
            user.password_hash = hash_password(payload.password)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, actor: User, user_id: uuid.UUID) -> None:
        user = self._get_for_write(actor, user_id)

        groups = GroupStore(self.db)
        memberships = MembershipStore(self.db)
        for group in groups.list_owned(user.id):
            memberships.delete_all_for_group(group.id)
            groups.delete(group)
        memberships.delete_all_for_user(user.id)
        self.users.delete(user)
        self.db.commit()
        logger.info("deleted user %s", user_id)
