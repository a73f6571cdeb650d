import uuid
from datetime import datetime
from pydantic import BaseModel, Field

class GroupCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)

class GroupOut(BaseModel):
    id: uuid.UUID
    name: str
    owner_id: uuid.UUID
    created_at: datetime
