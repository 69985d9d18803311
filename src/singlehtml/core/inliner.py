from __future__ import annotations

import logging
import os
import posixpath
import re
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import unquote

from bs4 import BeautifulSoup

from singlehtml.domain.schemas import InlinedReference
from singlehtml.io import read_text
from singlehtml.models import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ExportConfig()

_LINK_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
# external scripts only: nothing but whitespace between the tags
_SCRIPT_RE = re.compile(r"<script\b[^>]*>\s*</script\s*>", re.IGNORECASE)


def is_remote(reference: str) -> bool:
    return reference.lower().startswith(("http://", "https://"))


def _tag_attrs(markup: str, name: str) -> dict:
    tag = BeautifulSoup(markup, "lxml").find(name)
    return dict(tag.attrs) if tag is not None else {}


def _strip_locator(reference: str) -> str:
    return unquote(reference.split("#")[0].split("?")[0])


def resolve_local(report_dir: str | Path, reference: str) -> Optional[Path]:
    """
    Maps a local href/src onto a file under report_dir, or None when there is
    no such file.
    """
    relative = _strip_locator(reference).lstrip("/")
    if not relative:
        return None
    candidate = Path(os.path.normpath(Path(report_dir) / relative))
    return candidate if candidate.is_file() else None


def _is_stylesheet(attrs: dict) -> bool:
    rel = attrs.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return any(r.lower() == "stylesheet" for r in rel)


def inline_local_assets(
    html: str,
    report_dir: str | Path,
    injection: str,
    config: ExportConfig = DEFAULT_CONFIG,
) -> Tuple[str, List[InlinedReference]]:
    """
    Replaces local stylesheet links and external scripts with inline blocks.

    Remote (http/https) references and references to files that do not exist
    are left untouched. The injection script is placed directly in front of
    the first inlined script whose file name is config.main_script.

    Returns the new document and one InlinedReference per handled tag.
    """
    references: List[InlinedReference] = []
    injected = False

    def replace_css(match: re.Match) -> str:
        attrs = _tag_attrs(match.group(0), "link")
        href = attrs.get("href")
        if not href or not _is_stylesheet(attrs):
            return match.group(0)

        if is_remote(href):
            references.append(InlinedReference(kind="stylesheet", reference=href, action="remote"))
            return match.group(0)

        css_path = resolve_local(report_dir, href)
        if css_path is None:
            logger.warning("Stylesheet %s not found under %s; leaving link as is", href, report_dir)
            references.append(InlinedReference(kind="stylesheet", reference=href, action="missing"))
            return match.group(0)

        references.append(InlinedReference(kind="stylesheet", reference=href, action="inlined"))
        return f"<style>\n{read_text(css_path)}\n</style>"

    def replace_js(match: re.Match) -> str:
        nonlocal injected
        attrs = _tag_attrs(match.group(0), "script")
        src = attrs.get("src")
        if not src:
            return match.group(0)

        if is_remote(src):
            references.append(InlinedReference(kind="script", reference=src, action="remote"))
            return match.group(0)

        js_path = resolve_local(report_dir, src)
        if js_path is None:
            logger.warning("Script %s not found under %s; leaving tag as is", src, report_dir)
            references.append(InlinedReference(kind="script", reference=src, action="missing"))
            return match.group(0)

        inline_script = f"<script>\n{read_text(js_path)}\n</script>"
        is_main = posixpath.basename(_strip_locator(src)) == config.main_script
        if is_main and not injected:
            # the fetch override has to exist before the app asks for data
            inline_script = injection + inline_script
            injected = True
        references.append(InlinedReference(kind="script", reference=src, action="inlined", main_script=is_main))
        return inline_script

    result = _LINK_RE.sub(replace_css, html)
    result = _SCRIPT_RE.sub(replace_js, result)
    return result, references
