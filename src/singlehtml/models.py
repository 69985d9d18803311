from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ExportConfig:
    """
    Export settings.

    content_roots:
      Report subfolders whose textual files are embedded. Order matters twice:
      it is the walk order, and the shim tries the roots in this order when it
      cuts a requested URL down to a root-relative key.
    main_script:
      File name of the viewer's application script. The fetch override has to
      run before it, so the shim is placed right in front of it.
    global_name:
      Name of the window global holding the embedded files. Its presence in
      the output is also how we tell that the shim was injected.
    location:
      Page location assumed by normalize_key() when it resolves relative URLs.
    """
    entry_document: str = "index.html"
    content_roots: Tuple[str, ...] = ("data", "widgets", "export", "history")
    text_extensions: Tuple[str, ...] = (".json", ".csv", ".txt", ".html")
    main_script: str = "app.js"
    global_name: str = "__ALLURE_EMBEDDED__"
    location: str = "file:///index.html"


@dataclass(frozen=True)
class TextAsset:
    path: str  # relative to the report root, "/" separated
    content: str
