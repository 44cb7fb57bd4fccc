"""Read-only Excalidraw diagram previews.

Diagrams are embedded as JSON in a standalone page that loads the Excalidraw
React bundle from a CDN.
"""

from __future__ import annotations

import json

_VIEWER_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        html, body, #app {{ margin: 0; height: 100%; width: 100%; }}
    </style>
    <script src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
    <script src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
    <script src="https://unpkg.com/@excalidraw/excalidraw/dist/excalidraw.production.min.js"></script>
</head>
<body>
    <div id="app"></div>
    <script id="excalidraw-data" type="application/json">{data}</script>
    <script>
        const scene = JSON.parse(document.getElementById("excalidraw-data").textContent);
        const App = () => React.createElement(ExcalidrawLib.Excalidraw, {{
            initialData: {{
                elements: scene.elements || [],
                appState: Object.assign({{}}, scene.appState || {{}}, {{ theme: "{theme}", viewModeEnabled: true }}),
                files: scene.files || {{}},
                scrollToContent: true
            }},
            viewModeEnabled: true,
            theme: "{theme}"
        }});
        ReactDOM.createRoot(document.getElementById("app")).render(React.createElement(App));
    </script>
</body>
</html>
"""


def validate_excalidraw(content: str) -> bool:
    """Return whether ``content`` is a JSON object with ``"type": "excalidraw"``."""
    try:
        value = json.loads(content)
    except ValueError:
        return False
    return isinstance(value, dict) and value.get("type") == "excalidraw"


def render_excalidraw_html(content: str, is_dark_theme: bool) -> str:
    """Build the viewer page embedding ``content``.

    Only ``</script>`` needs escaping since the JSON sits in a script tag.
    """
    theme = "dark" if is_dark_theme else "light"
    safe_json = content.replace("</script>", "<\\/script>")
    return _VIEWER_TEMPLATE.format(data=safe_json, theme=theme)


__all__ = ["render_excalidraw_html", "validate_excalidraw"]
