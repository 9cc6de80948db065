"""Render markdown to a standalone HTML page and open it in the browser.

Small pages are opened as a base64 `data:` URL; pages whose HTML or encoded
URL would exceed MAX_DATA_URL_SIZE are written to a temp file instead.
"""

from __future__ import annotations

import base64
import html
import logging
import re
import tempfile
import time
import webbrowser
from pathlib import Path

import markdown

from .constants import MAX_DATA_URL_SIZE
from .exceptions import WeavexError

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r'<pre><code(?: class="language-(?P<lang>[^"]+)")?>(?P<body>.*?)</code></pre>', re.DOTALL)

_STYLE = """
        :root { color-scheme: light dark; }
        @media (prefers-color-scheme: dark) {
            :root { --bg: #0d1117; --bg-secondary: #161b22; --text: #c9d1d9; --text-secondary: #8b949e;
                    --accent: #58a6ff; --border: #30363d; --border-light: #21262d; }
        }
        @media (prefers-color-scheme: light) {
            :root { --bg: #ffffff; --bg-secondary: #f6f8fa; --text: #24292f; --text-secondary: #57606a;
                    --accent: #0969da; --border: #d0d7de; --border-light: #d8dee4; }
        }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Noto Sans', Helvetica, Arial, sans-serif;
               line-height: 1.6; max-width: 900px; margin: 0 auto; padding: 2rem;
               background: var(--bg); color: var(--text); }
        h1, h2, h3, h4, h5, h6 { margin-top: 24px; margin-bottom: 16px; font-weight: 600; line-height: 1.25;
                                 color: var(--accent); }
        h1, h2 { border-bottom: 1px solid var(--border-light); padding-bottom: 0.3em; }
        a { color: var(--accent); text-decoration: none; }
        a:hover { text-decoration: underline; }
        code { background: var(--bg-secondary); padding: 0.2em 0.4em; border-radius: 6px;
               font-family: 'SFMono-Regular', Consolas, 'Liberation Mono', Menlo, monospace; font-size: 85%; }
        .code-block-wrapper { position: relative; margin-bottom: 16px; }
        .code-block-header { background: var(--bg-secondary); padding: 8px 12px; border-radius: 6px 6px 0 0;
                             border-bottom: 1px solid var(--border); display: flex; justify-content: space-between;
                             align-items: center; font-size: 12px; color: var(--text-secondary); }
        .code-lang { font-weight: 600; text-transform: uppercase; }
        .copy-button { background: var(--bg); border: 1px solid var(--border); color: var(--text);
                       padding: 4px 8px; border-radius: 4px; cursor: pointer; font-size: 11px; }
        .copy-button.copied { background: #238636; color: white; border-color: #238636; }
        pre { background: var(--bg-secondary); padding: 16px; border-radius: 0 0 6px 6px; overflow-x: auto;
              line-height: 1.45; margin: 0; }
        pre code { background: none; padding: 0; display: block; }
        blockquote { padding: 0 1em; color: var(--text-secondary); border-left: 0.25em solid var(--border);
                     margin: 0 0 16px 0; }
        table { border-collapse: collapse; width: 100%; margin-bottom: 16px; display: block; overflow-x: auto; }
        th, td { border: 1px solid var(--border); padding: 6px 13px; }
        th { font-weight: 600; background: var(--bg-secondary); }
        img { max-width: 100%; height: auto; border-radius: 6px; }
        .meta { color: var(--text-secondary); font-size: 0.9em; margin-bottom: 2rem; padding-bottom: 1rem;
                border-bottom: 1px solid var(--border-light); }
"""

_SCRIPT = """
        function copyCode(button) {
            const code = button.closest('.code-block-wrapper').querySelector('code').innerText;
            navigator.clipboard.writeText(code).then(() => {
                button.textContent = 'Copied!';
                button.classList.add('copied');
                setTimeout(() => { button.textContent = 'Copy'; button.classList.remove('copied'); }, 2000);
            });
        }
"""


def _wrap_code_block(match: re.Match[str]) -> str:
    lang = match.group("lang") or ""
    body = match.group("body")
    label = html.escape(lang) if lang else "code"
    return (
        '<div class="code-block-wrapper"><div class="code-block-header">'
        f'<span class="code-lang">{label}</span>'
        '<button class="copy-button" onclick="copyCode(this)">Copy</button></div>'
        f"<pre><code>{body}</code></pre></div>"
    )


def markdown_to_html(markdown_content: str) -> str:
    """Convert markdown to an HTML fragment with tables and labelled code blocks."""
    rendered = markdown.markdown(markdown_content, extensions=["extra", "sane_lists"])
    return _CODE_BLOCK.sub(_wrap_code_block, rendered)


def create_html_document(markdown_content: str) -> str:
    body = markdown_to_html(markdown_content)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="color-scheme" content="light dark">
    <title>Weavex Result</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="meta">🧵 Generated by Weavex</div>
{body}
    <script>{_SCRIPT}    </script>
</body>
</html>
"""


def build_data_url(document: str) -> str:
    encoded = base64.b64encode(document.encode("utf-8")).decode("ascii")
    return f"data:text/html;charset=utf-8;base64,{encoded}"


def open_html_via_temp_file(document: str) -> Path:
    path = Path(tempfile.gettempdir()) / f"weavex_result_{int(time.time())}.html"
    try:
        path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise WeavexError(f"Failed to write HTML to temp file: {exc}") from exc
    if not webbrowser.open(path.as_uri()):
        raise WeavexError("Failed to open browser with temp file")
    logger.debug("Opened HTML in browser from temp file: %s", path)
    return path


def open_markdown_in_browser(markdown_content: str) -> None:
    """Render markdown and show it in the default browser.

    Raises:
        WeavexError: If no browser could be launched or the temp file could not be written
    """
    document = create_html_document(markdown_content)
    size = len(document.encode("utf-8"))
    if size > MAX_DATA_URL_SIZE:
        logger.debug("HTML size (%d bytes) exceeds data URL limit, using temp file fallback", size)
        open_html_via_temp_file(document)
        return

    data_url = build_data_url(document)
    if len(data_url) > MAX_DATA_URL_SIZE:
        logger.debug("Encoded data URL (%d bytes) exceeds limit, using temp file fallback", len(data_url))
        open_html_via_temp_file(document)
        return

    if not webbrowser.open(data_url):
        raise WeavexError("Failed to open browser with data URL")


__all__ = [
    "build_data_url",
    "create_html_document",
    "markdown_to_html",
    "open_markdown_in_browser",
]
