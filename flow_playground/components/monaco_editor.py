"""Monaco editor integration for Reflex."""

from __future__ import annotations

from typing import Any

from reflex.components.component import NoSSRComponent
from reflex.vars import Var


class MonacoEditor(NoSSRComponent):
    """Read-only wrapper around @monaco-editor/react for generated code."""

    library = "@monaco-editor/react@4.6.0"
    lib_dependencies = ["monaco-editor@0.45.0"]
    tag = "Editor"
    is_default = True

    value: Var[str]
    language: Var[str] = Var.create("javascript")
    theme: Var[str] = Var.create("vs-dark")
    height: Var[str] = Var.create("480px")
    options: Var[dict[str, Any]] = Var.create({"readOnly": True, "minimap": {"enabled": False}})
