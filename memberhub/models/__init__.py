from memberhub.models.group import Group
from memberhub.models.membership import Membership, PendingInvite, ResolvedUser
from memberhub.models.user import User

__all__ = ["User", "Group", "Membership", "ResolvedUser", "PendingInvite"]
