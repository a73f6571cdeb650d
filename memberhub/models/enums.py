from enum import Enum

class Role(str, Enum):
    user = "user"
    admin = "admin"

# caller's standing inside a group (derived, not stored)
class GroupRole(str, Enum):
    owner = "owner"
    member = "member"
