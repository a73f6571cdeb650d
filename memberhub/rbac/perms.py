from memberhub.models.enums import GroupRole

PERMS: dict[str, set[GroupRole]] = {
    "group:read": {GroupRole.owner, GroupRole.member},
    "group:delete": {GroupRole.owner},

    "members:read": {GroupRole.owner, GroupRole.member},
    "members:invite": {GroupRole.owner},
    "members:remove": {GroupRole.owner},
    "members:update": {GroupRole.owner},
}
