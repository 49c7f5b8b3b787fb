import os
from pathlib import Path

APP_DIR_NAME = "vhsave"


def _user_data_dir() -> Path:
    app_data = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or os.getenv("XDG_STATE_HOME")
    if app_data:
        return Path(app_data) / APP_DIR_NAME
    return Path(os.path.expanduser("~")) / f".{APP_DIR_NAME}"


def get_writable_dir(sub_dir: str = "logs") -> Path:
    """Get a writable directory path, preferring the per-user data folder."""
    target_dir = _user_data_dir() / sub_dir

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        # Test write access
        test_file = target_dir / ".write_test"
        test_file.touch()
        test_file.unlink()
        return target_dir
    except (PermissionError, OSError):
        # Fall back to the working directory
        target_dir = Path.cwd() / sub_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        return target_dir
