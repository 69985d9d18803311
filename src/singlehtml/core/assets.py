from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Sequence
from urllib.parse import unquote, urljoin, urlsplit

from singlehtml.io import read_text
from singlehtml.models import ExportConfig, TextAsset

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ExportConfig()

# relative path -> raw text, in walk order
VirtualFileSystem = Dict[str, str]


def is_textual_file(name: str, text_extensions: Sequence[str] = DEFAULT_CONFIG.text_extensions) -> bool:
    """Suffix check only; the file itself is never opened."""
    lower = name.lower()
    return any(lower.endswith(ext) for ext in text_extensions)


def iter_text_assets(report_dir: str | Path, config: ExportConfig = DEFAULT_CONFIG) -> Iterator[TextAsset]:
    """
    Walks each content root under report_dir (roots in configured order, files
    sorted within a root) and yields the textual files.

    Missing roots are skipped; a file that is not UTF-8 raises AssetDecodeError.
    """
    base = Path(report_dir)
    for root in config.content_roots:
        root_path = base / root
        if not root_path.is_dir():
            logger.debug("Content root %s not present, skipping", root)
            continue

        for file_path in sorted(p for p in root_path.rglob("*") if p.is_file()):
            if not is_textual_file(file_path.name, config.text_extensions):
                continue
            relative = file_path.relative_to(base).as_posix()
            yield TextAsset(path=relative, content=read_text(file_path))


def build_virtual_filesystem(report_dir: str | Path, config: ExportConfig = DEFAULT_CONFIG) -> VirtualFileSystem:
    vfs: VirtualFileSystem = {}
    for asset in iter_text_assets(report_dir, config):
        logger.debug("Embedding %s (%d chars)", asset.path, len(asset.content))
        vfs[asset.path] = asset.content
    logger.info("Collected %d textual assets", len(vfs))
    return vfs


def normalize_key(
    locator: str,
    content_roots: Sequence[str] = DEFAULT_CONFIG.content_roots,
    location: str = DEFAULT_CONFIG.location,
) -> str:
    """
    Same algorithm as normalizeKey() in the injected shim:

      1. resolve against the page location, keep path + query
         (raw input if that fails)
      2. drop query and fragment
      3. cut everything before the last occurrence of the first content root
         ("data/", "widgets/", ...) that occurs at all
      4. drop a leading "./", then a leading "/"
    """
    key = locator
    try:
        parts = urlsplit(urljoin(location, locator))
        key = (parts.path or locator) + ("?" + parts.query if parts.query else "")
    except ValueError:
        pass

    key = key.split("?")[0]
    key = key.split("#")[0]

    for root in content_roots:
        idx = key.rfind(root.rstrip("/") + "/")
        if idx != -1:
            key = key[idx:]
            break

    if key.startswith("./"):
        key = key[2:]
    if key.startswith("/"):
        key = key[1:]
    return key


def lookup(
    vfs: VirtualFileSystem,
    locator: str,
    config: ExportConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """
    What the shim answers for a request, or None when it falls through.

    The normalized key is tried as is first; a miss retries it percent-decoded,
    since the browser sends "data/sub dir/x.json" as "data/sub%20dir/x.json".
    """
    key = normalize_key(locator, config.content_roots, config.location)
    if key in vfs:
        return vfs[key]
    return vfs.get(unquote(key))


def content_type_for(key: str) -> str:
    if key.endswith(".json"):
        return "application/json"
    if key.endswith(".csv"):
        return "text/csv"
    if key.endswith(".txt"):
        return "text/plain"
    return "text/html"
