import os
import stat
import platform
import datetime
import logging

logger = logging.getLogger(__name__)


def set_owner_only_permissions(filepath: str) -> bool:
    """
    Make a file readable/writable by its owner only (0600).

    On Windows the POSIX mode bits do not restrict other users, so the file is
    left as created and False is returned.
    """
    if platform.system() == 'Windows':
        logger.warning(f"Skipping owner-only permissions for {filepath}: not supported on Windows.")
        return False
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError as e:
        logger.error(f"Failed to set file permissions for {filepath}: {e}")
        return False
    return True


def format_timestamp(value: str) -> str:
    """Render an ISO-8601 timestamp for display; unparseable values pass through."""
    if not value:
        return ""
    try:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")
