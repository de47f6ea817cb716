from app.configs.settings import (
    COMMENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    DUPLICATE_USER_MESSAGE,
    INVALID_ID_MESSAGE,
    NAME_MAX_LENGTH,
    NOTE_MAX,
    NOTE_MIN,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    WELCOME_MESSAGE,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "COMMENT_MAX_LENGTH",
    "CONTENT_MIN_LENGTH",
    "DUPLICATE_USER_MESSAGE",
    "INVALID_ID_MESSAGE",
    "NAME_MAX_LENGTH",
    "NOTE_MAX",
    "NOTE_MIN",
    "TITLE_MAX_LENGTH",
    "TITLE_MIN_LENGTH",
    "USERNAME_MAX_LENGTH",
    "USERNAME_MIN_LENGTH",
    "WELCOME_MESSAGE",
    "Settings",
    "file_logger",
    "settings",
]
