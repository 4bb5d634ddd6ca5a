"""Storage utilities for locating the durable session file"""
from pathlib import Path


def get_session_store_path(
    directory: str,
    filename: str = "session.json",
) -> str:
    """
    Construct the session storage file path from components.

    Args:
        directory: Directory holding client-side state (e.g., '/var/lib/maintrack')
        filename: Name of the JSON file inside that directory

    Returns:
        Complete file path string

    Example:
        >>> get_session_store_path("/var/lib/maintrack")
        '/var/lib/maintrack/session.json'
    """
    return str(Path(directory) / filename)
