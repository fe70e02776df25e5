"""Exit codes for every command. Codes are private to each command; 0 is success."""
from __future__ import annotations

from enum import IntEnum


class JascpExit(IntEnum):
    SUCCESS = 0
    DOWNLOAD_FAILED = 2
    LOCAL_MISSING = 3
    UPLOAD_FAILED = 4
    EDITOR_NOT_FOUND = 5
    UNKNOWN_OPTION = 6
    SCP_NOT_FOUND = 7
    EDITOR_FAILED = 8


class JadeExit(IntEnum):
    SUCCESS = 0
    CONFIG_MISSING = 2
    DOWNLOAD_FAILED = 3
    LOCAL_MISSING = 4
    BACKUP_FAILED = 5
    UPLOAD_FAILED = 6
    EDITOR_NOT_FOUND = 7
    UP_FAILED = 8
    DOWN_FAILED = 9
    UNKNOWN_OPTION = 10
    RESTART_UP_FAILED = 11
    SCP_NOT_FOUND = 12
    SSH_NOT_FOUND = 13
    BAD_TRANSPORT = 14
    EDITOR_FAILED = 15


class JapgExit(IntEnum):
    SUCCESS = 0
    BAD_WORD_COUNT = 2
    WORD_LIST_MISSING = 3
    XCLIP_NOT_FOUND = 4
    NOT_ENOUGH_WORDS = 5
    CLIPBOARD_FAILED = 6
    UNEXPECTED_ARGUMENT = 7


class JarmExit(IntEnum):
    SUCCESS = 0
    # mount N (0-based) fails with FIRST_MOUNT_FAILED + N
    FIRST_MOUNT_FAILED = 2
    SECOND_MOUNT_FAILED = 3
    RCLONE_NOT_FOUND = 10
    UNKNOWN_OPTION = 11


class JauExit(IntEnum):
    SUCCESS = 0
    SUDO_NOT_FOUND = 2
    DNF_NOT_FOUND = 3
    INSTALL_FAILED = 4
    MAKECACHE_FAILED = 5
    UPDATE_FAILED = 6
    RPMCONF_FAILED = 7
    SECURITY_UPDATE_FAILED = 8
    AUTOREMOVE_FAILED = 9
    CLEAN_FAILED = 10
    FLATPAK_UPDATE_FAILED = 11
    FLATPAK_CLEANUP_FAILED = 12
    SECURITY_CHECK_FAILED = 13
    UNKNOWN_OPTION = 14


class InstallExit(IntEnum):
    SUCCESS = 0
    INSTALL_DIR_FAILED = 1
    SCRIPTS_DIR_MISSING = 2
    CONFIG_DIR_MISSING = 3
    DICT_DIR_MISSING = 4
    SOURCE_MISSING = 5
    COPY_FAILED = 6
    CHMOD_FAILED = 7
    CONFIG_DIR_FAILED = 8
    CONFIG_COPY_FAILED = 9
    TEMPLATE_MISSING = 10
    WORD_LIST_COPY_FAILED = 11
    UNKNOWN_OPTION = 12


__all__ = ["JascpExit", "JadeExit", "JapgExit", "JarmExit", "JauExit", "InstallExit"]
