"""
Selection file persistence — one ``KAREI_<DOMAIN>=<value>`` line per file.

Each domain owns its own file. Reading picks the first matching key
(case-insensitive, optional quotes around the value) and ignores every
other line. Writing replaces the whole file: anything else that was in
it is gone afterwards.

Writes are atomic (write to temp file, then rename) so a crash mid-write
leaves either the old selection or the new one, never half a line.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

KEY_PREFIX = "KAREI_"
_QUOTES = "\"'"


def selection_key(domain: str) -> str:
    """Persisted key for a domain: ``theme`` → ``KAREI_THEME``."""
    return f"{KEY_PREFIX}{domain.upper()}"


def read_selections(path: Path, domain: str) -> list[str]:
    """All values recorded for ``domain`` in file order.

    Returns an empty list when the file is missing or unreadable; the
    caller decides which value, if any, is acceptable.
    """
    if not path.is_file():
        logger.debug("No selection file at %s", path)
        return []

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read selection file %s: %s", path, e)
        return []

    prefix = f"{selection_key(domain)}=".upper()
    values: list[str] = []
    for line in raw.splitlines():
        line = line.strip()
        if line.upper().startswith(prefix):
            values.append(line[len(prefix):].strip(_QUOTES))
    return values


def write_selection(path: Path, domain: str, value: str) -> None:
    """Overwrite ``path`` with the single selection line for ``domain``.

    Creates parent directories as needed.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    content = f"{selection_key(domain)}={value}\n"

    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp.replace(path)
        logger.debug("Selection saved to %s: %s", path, value)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
