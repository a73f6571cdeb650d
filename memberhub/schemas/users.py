import uuid
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from memberhub.models.enums import Role

class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    username: str
    role: Role
    created_at: datetime

class UserUpdateIn(BaseModel):
    email: EmailStr | None = None
    username: str | None = Field(default=None, min_length=1, max_length=200)
    password: str | None = Field(default=None, min_length=6)
