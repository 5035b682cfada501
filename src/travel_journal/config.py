"""Configuration constants for travel-journal."""

import os
from pathlib import Path

# Overrides DATA_DIRECTORIES when set.
DATA_DIR_ENV_VAR = "TRAVEL_JOURNAL_DATA_DIR"

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/travel-journal").expanduser(),
    Path("~/.travel-journal").expanduser(),
    Path("~/.config/travel-journal").expanduser(),
]

DATABASE_FILENAME = "journal.db"

# One stored JournalDocument per destination, under this prefix.
DOCS_KEY_PREFIX = "travelJournal.docs.v1:"

# Autosave waits this long after the last keystroke.
AUTOSAVE_DELAY_MS = 300

FIRST_PAGE_TITLE = "Page 1"
DEFAULT_PAGE_TITLE = "New page"
DEFAULT_SECTION_TITLE = "New section"

BREADCRUMB_SEPARATOR = " / "
EDITOR_PLACEHOLDER = "Select a page to start writing..."


def resolve_data_directory() -> Path:
    """Return the data directory: env override, else first existing candidate, else the first one."""
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
