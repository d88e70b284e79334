import os
from pathlib import Path

DEFAULT_HOME = Path.home() / ".sckm"


def extract_value(text: str, start_token: str, end_token: str) -> str:
    """
    Return the text between the first start_token and the next end_token.

    A missing token yields an empty string instead of an error, so one absent
    field never throws away the rest of the line.
    """
    start_index = text.find(start_token)
    if start_index == -1:
        return ""
    start_index += len(start_token)
    end_index = text.find(end_token, start_index)
    if end_index == -1:
        return ""
    return text[start_index:end_index]


def app_data_dir() -> Path:
    """Per-user directory for preferences, app logs and session files"""
    override = os.getenv("SCKM_HOME")
    data_dir = Path(override).expanduser() if override else DEFAULT_HOME
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
