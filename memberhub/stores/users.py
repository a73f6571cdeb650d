import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from memberhub.models.enums import Role
from memberhub.models.user import User

def normalize_email(email: str) -> str:
    return email.lower().strip()

class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: uuid.UUID) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == normalize_email(email)))

    def create(self, email: str, username: str, password_hash: str, role: Role = Role.user) -> User:
        user = User(
            email=normalize_email(email),
            username=username,
            password_hash=password_hash,
            role=role,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
