from memberhub.stores.groups import GroupStore
from memberhub.stores.memberships import DuplicateMembership, MembershipStore
from memberhub.stores.users import UserStore

__all__ = ["UserStore", "GroupStore", "MembershipStore", "DuplicateMembership"]
