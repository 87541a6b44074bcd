"""HTML usage guide returned for paths that match no URL shape."""

import html

_EXAMPLES = (
    ("GitHub Releases", "containerd/containerd/releases/download/v1.6.4/cri-containerd-cni-1.6.4-linux-amd64.tar.gz"),
    ("Tagged Files", "jquery/jquery@3.6.4/dist/jquery.min.js"),
    ("Blob Links", "nginx/nginx/blob/master/CHANGELOG"),
    ("Raw Links", "nginx/nginx/raw/master/CHANGELOG"),
)

_PATTERNS = (
    "user/repo/releases/download/tag/file",
    "user/repo@tag/file",
    "user/repo/blob/ref/file",
    "user/repo/raw/ref/file",
)

_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Usage Guide</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            margin: 20px;
            padding: 20px;
            background-color: #f4f4f4;
            color: #333;
        }}
        h1 {{
            color: #007bff;
        }}
        pre {{
            background-color: #eee;
            padding: 10px;
            border-radius: 5px;
        }}
        code {{
            font-family: monospace;
            background-color: #f9f9f9;
            padding: 2px 4px;
            border-radius: 4px;
        }}
    </style>
</head>
<body>
    <h1>Usage Guide</h1>
    <p>Use the following endpoints to download GitHub files with CORS enabled:</p>
{patterns}
    <h2>Examples</h2>
{examples}
    <h2>Notes</h2>
    <ul>
        <li>Make sure to use valid user, repo, and version names.</li>
        <li>Only alphanumeric characters, dots, dashes, and underscores are allowed in names.</li>
        <li>Release downloads are checked for existence before they are relayed.</li>
    </ul>
</body>
</html>
"""


def _code_block(url: str) -> str:
    return f"    <pre><code>{html.escape(url)}</code></pre>"


def render_usage_guide(base_url: str = "", access_prefix: str = "/3lwqk", routing_prefix: str = "/gh/") -> str:
    """Render the usage guide.

    Args:
        base_url: Public origin of the proxy (e.g. "https://dl.example.com"),
            empty for host-relative examples
        access_prefix: Access prefix the examples are shown under
        routing_prefix: Routing prefix the examples are shown under

    Returns:
        A complete HTML document
    """
    root = f"{base_url.rstrip('/')}{access_prefix}{routing_prefix}"

    patterns = "\n".join(_code_block(root + pattern) for pattern in _PATTERNS)
    examples = "\n".join(
        f"    <h3>{html.escape(title)}</h3>\n{_code_block(root + path)}" for title, path in _EXAMPLES
    )
    return _TEMPLATE.format(patterns=patterns, examples=examples)
