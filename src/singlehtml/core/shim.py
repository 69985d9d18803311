from __future__ import annotations

import json
import logging
from typing import Optional, Sequence, Tuple

from singlehtml.models import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ExportConfig()

PLACEMENT_MAIN_SCRIPT = "before-main-script"
PLACEMENT_HEAD_CLOSE = "before-head-close"
PLACEMENT_PREPENDED = "prepended"

# Tokens are substituted in this order: @@GLOBAL@@, @@ROOTS@@, @@MAP@@.
# The map goes last so report content can never be mistaken for a token.
_SHIM_TEMPLATE = """<script>
(function(){
  const embedded = window.@@GLOBAL@@ = @@MAP@@;
  const originalFetch = window.fetch ? window.fetch.bind(window) : null;
  const roots = @@ROOTS@@;
  function normalizeKey(input){
    try {
      const u = new URL(input, window.location.href);
      input = (u.pathname || input) + (u.search || '');
    } catch(e) { }
    if (input.indexOf('?') !== -1) input = input.split('?')[0];
    if (input.indexOf('#') !== -1) input = input.split('#')[0];
    for (var i=0;i<roots.length;i++){
      var idx = input.lastIndexOf(roots[i]);
      if (idx !== -1){ input = input.substring(idx); break; }
    }
    if (input.startsWith('./')) input = input.slice(2);
    if (input.startsWith('/')) input = input.slice(1);
    return input;
  }
  window.fetch = function(resource, init){
    try {
      const raw = typeof resource === 'string' ? resource : (resource && resource.url) || String(resource || '');
      var key = normalizeKey(raw);
      if (!Object.prototype.hasOwnProperty.call(embedded, key)) {
        try { key = decodeURIComponent(key); } catch(e) { }
      }
      if (Object.prototype.hasOwnProperty.call(embedded, key)) {
        const body = embedded[key];
        const ct = key.endsWith('.json') ? 'application/json'
                 : key.endsWith('.csv') ? 'text/csv'
                 : key.endsWith('.txt') ? 'text/plain' : 'text/html';
        return Promise.resolve(new Response(body, { status: 200, headers: { 'Content-Type': ct } }));
      }
    } catch (e) { }
    if (originalFetch) return originalFetch(resource, init);
    return Promise.reject(new Error('fetch unsupported in this environment'));
  };
})();
</script>
"""


def _roots_literal(content_roots: Sequence[str]) -> str:
    return json.dumps([root.rstrip("/") + "/" for root in content_roots])


def build_injection_script(embedded_map: str, config: ExportConfig = DEFAULT_CONFIG) -> str:
    """
    Wraps a serialized map (see serializer.serialize_embedded_map) in the
    <script> block that publishes it as window.<global_name> and overrides
    window.fetch to answer from it.
    """
    return (
        _SHIM_TEMPLATE.replace("@@GLOBAL@@", config.global_name)
        .replace("@@ROOTS@@", _roots_literal(config.content_roots))
        .replace("@@MAP@@", embedded_map)
    )


def has_injection(html: str, config: ExportConfig = DEFAULT_CONFIG) -> bool:
    return config.global_name in html


def ensure_injection_present(html: str, injection: str, config: ExportConfig = DEFAULT_CONFIG) -> Tuple[str, Optional[str]]:
    """
    Makes sure the shim is in the document.

    Returns the document and where the shim was put by this call, or None if
    it was already there.
    """
    if has_injection(html, config):
        return html, None

    head_close = html.find("</head>")
    if head_close == -1:
        head_close = html.lower().find("</head>")
    if head_close >= 0:
        logger.info("Main script not found; injecting shim before </head>")
        return html[:head_close] + injection + html[head_close:], PLACEMENT_HEAD_CLOSE

    logger.info("No </head> in document; prepending shim")
    return injection + html, PLACEMENT_PREPENDED
