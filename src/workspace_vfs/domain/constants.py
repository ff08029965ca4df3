from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the language classification table, default artifact names
and the starter project the workspace opens with.
"""

from typing import Dict, List, Tuple

APP_NAME = "workspace-vfs"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# NAMING POLICY
# -----------------------------------------------------------------------------
FALLBACK_LANGUAGE = "plaintext"

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "md": "markdown",
    "yaml": "yaml",
    "yml": "yaml",
}

# -----------------------------------------------------------------------------
# EXPORT ARTIFACTS
# -----------------------------------------------------------------------------
PROJECT_EXPORT_NAME = "project.json"
PROJECT_MEDIA_TYPE = "application/json"
FILE_MEDIA_TYPE = "text/plain;charset=utf-8"

# -----------------------------------------------------------------------------
# ASSISTANT DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_GENERATED_NAME = "generated.js"
DEFAULT_ASSISTANT_ENDPOINT = "http://127.0.0.1:8080/v1/completions"
DEFAULT_ASSISTANT_MODEL = "gpt2"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150
DEFAULT_REQUEST_TIMEOUT = 60

# -----------------------------------------------------------------------------
# STARTER PROJECT
# -----------------------------------------------------------------------------
SEED_FOLDER = "src"

SEED_FILES: List[Tuple[str, str]] = [
    (
        "App.tsx",
        "import React from 'react';\n"
        "\n"
        "function App() {\n"
        "  return (\n"
        "    <div className=\"App\">\n"
        "      <h1>Hello World</h1>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
        "\n"
        "export default App;",
    ),
    (
        "index.css",
        "body {\n"
        "  margin: 0;\n"
        "  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;\n"
        "}",
    ),
]
