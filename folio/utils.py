"""Utility functions for Folio.

This module contains small helpers used throughout the Folio codebase:
date formatting, slugs, path checks and output directory handling.

Key functions:
    format_date: Convert an ISO date to a "March 5, 2025" label.
    parse_iso_date: Parse the calendar date out of an ISO date/datetime string.
    slugify: Convert titles and filenames to URL slugs.
    is_markdown: Check if a path is a Markdown file.
    ensure_clean_dir: Ensure a directory exists and is empty.
    copy_tree: Copy a directory recursively, merging into the destination.
"""

from __future__ import annotations

import re
import shutil
from datetime import date, datetime
from pathlib import Path

INVALID_DATE = "Invalid Date"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_iso_date(value: str) -> date | None:
    """Parse the calendar date from an ISO 8601 date or datetime string.

    Only the date part is kept; a time or offset does not shift the day.

    Args:
        value: String such as ``"2025-01-17"`` or ``"2025-01-17T09:30:00Z"``.

    Returns:
        date object, or None if the string is not a valid ISO date.
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def format_date(value: str) -> str:
    """Format an ISO date string as a long English label.

    Month names are fixed English names regardless of the process locale, and
    the day is not zero-padded.

    Args:
        value: ISO date string.

    Returns:
        Label like ``"March 5, 2025"``, or ``"Invalid Date"`` if unparseable.

    Examples:
        >>> format_date("2025-01-17")
        'January 17, 2025'

        >>> format_date("2025-03-05")
        'March 5, 2025'
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return INVALID_DATE
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def today_iso() -> str:
    """Return today's date as ``YYYY-MM-DD``."""
    return date.today().isoformat()


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Title or filename stem.

    Returns:
        URL-friendly slug, ``"post"`` if nothing usable remains.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", text)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "post"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the name ends in ``.md``.
    """
    return path.name.endswith(".md")


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def copy_tree(src: Path, dest: Path) -> None:
    """Copy a directory recursively into ``dest``, creating it if needed.

    Existing files in ``dest`` are overwritten; other files are kept.

    Args:
        src: Source directory.
        dest: Destination directory.
    """
    shutil.copytree(src, dest, dirs_exist_ok=True)
