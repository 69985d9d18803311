from __future__ import annotations

import logging
from pathlib import Path

from singlehtml.core.errors import AssetDecodeError, AssetReadError, OutputWriteError

logger = logging.getLogger(__name__)


def read_text(path: str | Path) -> str:
    """Reads a file as strict UTF-8; unreadable or undecodable content aborts the export."""
    p = Path(path)
    try:
        # newline="" keeps \r\n as in the file
        with p.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise AssetDecodeError(f"{p} is not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise AssetReadError(f"Could not read {p}: {e}") from e


def write_document(path: str | Path, html: str) -> Path:
    """
    Writes the bundled document as UTF-8, creating missing parent folders and
    replacing any existing file.
    """
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" as written on every platform
        with out.open("w", encoding="utf-8", newline="") as f:
            f.write(html)
    except OSError as e:
        raise OutputWriteError(f"Could not write {out}: {e}") from e
    logger.info("Wrote %s", out)
    return out
