"""Permission bit flags for servers and channels.

Servers store their defaults as a ``[server, channel]`` pair of integers.
"""

from enum import IntFlag


class ServerPermission(IntFlag):
    """Server-wide permissions."""

    VIEW = 1 << 0
    MANAGE_ROLES = 1 << 1
    MANAGE_CHANNELS = 1 << 2
    MANAGE_SERVER = 1 << 3
    KICK_MEMBERS = 1 << 4
    BAN_MEMBERS = 1 << 5
    CHANGE_NICKNAME = 1 << 12
    MANAGE_NICKNAMES = 1 << 13
    CHANGE_AVATAR = 1 << 14
    REMOVE_AVATARS = 1 << 15


class ChannelPermission(IntFlag):
    """Per-channel permissions."""

    VIEW = 1 << 0
    SEND_MESSAGE = 1 << 1
    MANAGE_MESSAGES = 1 << 2
    MANAGE_CHANNEL = 1 << 3
    VOICE_CALL = 1 << 4
    INVITE_OTHERS = 1 << 5
    EMBED_LINKS = 1 << 6
    UPLOAD_FILES = 1 << 7


SERVER_DEFAULT_PERMISSION = (
    ServerPermission.VIEW
    | ServerPermission.CHANGE_NICKNAME
    | ServerPermission.CHANGE_AVATAR
)

CHANNEL_DEFAULT_PERMISSION_DM = (
    ChannelPermission.VIEW
    | ChannelPermission.SEND_MESSAGE
    | ChannelPermission.MANAGE_CHANNEL
    | ChannelPermission.VOICE_CALL
    | ChannelPermission.INVITE_OTHERS
    | ChannelPermission.EMBED_LINKS
    | ChannelPermission.UPLOAD_FILES
)

CHANNEL_DEFAULT_PERMISSION_SERVER = (
    ChannelPermission.VIEW
    | ChannelPermission.SEND_MESSAGE
    | ChannelPermission.VOICE_CALL
    | ChannelPermission.INVITE_OTHERS
    | ChannelPermission.EMBED_LINKS
    | ChannelPermission.UPLOAD_FILES
)


def default_server_permissions() -> list[int]:
    """The ``[server, channel]`` pair stored on newly created servers."""
    return [int(SERVER_DEFAULT_PERMISSION), int(CHANNEL_DEFAULT_PERMISSION_SERVER)]
