"""Directory handoff to the wrapping shell function.

The shell function runs ``lazynav`` and then ``cd``s into the path written
here, if any.
"""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)

CD_FILE = Path.home() / ".lazynav-cd"


def broadcast_change_directory(directory: Path, cd_file: Path | None = None) -> None:
    """Replace the handoff file with ``directory``'s absolute path."""
    target = cd_file if cd_file is not None else CD_FILE
    target.unlink(missing_ok=True)
    target.write_text(str(directory.absolute()), encoding="utf-8")
    log.debug("Wrote %s to %s", directory, target)


__all__ = ["CD_FILE", "broadcast_change_directory"]
