from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from singlehtml.core.assets import build_virtual_filesystem
from singlehtml.core.errors import EntryDocumentMissingError
from singlehtml.core.inliner import inline_local_assets
from singlehtml.core.serializer import serialize_embedded_map
from singlehtml.core.shim import PLACEMENT_MAIN_SCRIPT, build_injection_script, ensure_injection_present
from singlehtml.domain.schemas import ExportResult
from singlehtml.io import read_text, write_document
from singlehtml.models import ExportConfig

logger = logging.getLogger(__name__)


def bundle_report(report_dir: str | Path, config: ExportConfig = ExportConfig()) -> Tuple[str, ExportResult]:
    """
    Builds the single-file document in memory.

    Returns (html, ExportResult) where the result's output_path/size_bytes are
    still unset.
    """
    base = Path(report_dir).absolute()
    entry = base / config.entry_document
    if not entry.is_file():
        raise EntryDocumentMissingError(f"{config.entry_document} not found: {entry}")

    index_html = read_text(entry)

    # 1. virtual filesystem -> embeddable literal -> shim
    vfs = build_virtual_filesystem(base, config)
    injection = build_injection_script(serialize_embedded_map(vfs), config)

    # 2. inline local CSS/JS; the shim goes in front of the main script
    html, references = inline_local_assets(index_html, base, injection, config)

    # 3. unexpected layout: make sure the shim is there anyway
    html, placement = ensure_injection_present(html, injection, config)
    if placement is None:
        placement = PLACEMENT_MAIN_SCRIPT

    result = ExportResult(
        output_path="",
        entry_document=str(entry),
        embedded_paths=list(vfs),
        references=references,
        shim_placement=placement,
    )
    return html, result


def export_report(
    report_dir: str | Path,
    output_path: str | Path,
    config: ExportConfig = ExportConfig(),
) -> ExportResult:
    """Bundles report_dir into one HTML file at output_path."""
    html, result = bundle_report(report_dir, config)
    out = write_document(Path(output_path).absolute(), html)
    result.output_path = str(out)
    result.size_bytes = len(html.encode("utf-8"))
    logger.info(
        "Exported %s: %d embedded files, %d inlined references",
        out, len(result.embedded_paths), result.inlined_count,
    )
    return result
