import sys
import os

import pytest

# ---------------------------------------------------------------------------
# Make the source tree importable when pytest is run from the project root
# ---------------------------------------------------------------------------
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Allure Report</title>
<link rel="favicon" href="favicon.ico?v=2">
<link rel="stylesheet" type="text/css" href="styles.css">
<link rel="stylesheet" href="https://fonts.example.com/css?family=Roboto">
</head>
<body>
<div id="alert"></div>
<div id="content"><span class="spinner"></span></div>
<script src="https://cdn.example.com/polyfill.js"></script>
<script src="app.js"></script>
<script src="plugins/behaviors/index.js"></script>
</body>
</html>
"""

STYLES_CSS = "body { color: #333; }\n.spinner:after { content: \"...\"; }"
APP_JS = "console.log('allure app');\nfetch('data/suites.json');"
PLUGIN_JS = "allure.api.addTab('behaviors');"


def write_tree(root, files):
    """files: relative path -> str (UTF-8 text) or bytes."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def report_dir(tmp_path):
    """A small report folder laid out like `allure generate` output."""
    return write_tree(tmp_path / "allure-report", {
        "index.html": INDEX_HTML,
        "styles.css": STYLES_CSS,
        "app.js": APP_JS,
        "favicon.ico": b"\x00\x00\x01\x00",
        "plugins/behaviors/index.js": PLUGIN_JS,
        "data/suites.json": '{"x":1}',
        "data/suites.csv": "\"Status\",\"Name\"\n\"passed\",\"login\"\n",
        "data/attachments/1a2b.txt": "line one\r\nline\ttwo",
        "data/attachments/3c4d.png": b"\x89PNG\r\n\x1a\n",
        "data/test-cases/abc.json": '{"name":"Login \\"works\\"","status":"passed"}',
        "widgets/summary.json": '{"statistic":{"passed":1}}',
        "history/history-trend.json": "[]",
        "export/mail.html": "<html><body>mail</body></html>",
    })
