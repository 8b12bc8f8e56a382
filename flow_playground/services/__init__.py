from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ArgumentDecl",
    "ImportRef",
    "MissingPrepareClauseError",
    "extract_account_calls",
    "extract_arguments",
    "extract_contract_name",
    "extract_imports",
    "extract_signer_count",
    "ArgumentGroup",
    "default_for",
    "group_arguments",
    "name_of",
    "pad_to_signer_count",
    "TemplateError",
    "render_template",
    "assemble_contract_test",
    "assemble_script_test",
    "assemble_transaction_test",
    "CodeFormattingError",
    "format_code",
    "ScaffoldClient",
    "ScaffoldFetchError",
    "PackageCollisionError",
    "ZipPackageWriter",
    "ExportBundle",
    "ProjectExporter",
    "Project",
    "ProjectRepository",
    "ProjectNotFoundError",
]

_EXPORT_MAP = {
    "extraction": {
        "ArgumentDecl",
        "ImportRef",
        "MissingPrepareClauseError",
        "extract_account_calls",
        "extract_arguments",
        "extract_contract_name",
        "extract_imports",
        "extract_signer_count",
    },
    "arguments": {"ArgumentGroup", "default_for", "group_arguments"},
    "accounts": {"name_of", "pad_to_signer_count"},
    "templating": {"TemplateError", "render_template"},
    "testgen": {
        "assemble_contract_test",
        "assemble_script_test",
        "assemble_transaction_test",
    },
    "formatting": {"CodeFormattingError", "format_code"},
    "scaffold": {"ScaffoldClient", "ScaffoldFetchError"},
    "packaging": {"PackageCollisionError", "ZipPackageWriter"},
    "exporter": {"ExportBundle", "ProjectExporter"},
    "projects": {"Project", "ProjectRepository", "ProjectNotFoundError"},
}


def __getattr__(name: str) -> Any:
    for module_name, symbols in _EXPORT_MAP.items():
        if name in symbols:
            module = import_module(f".{module_name}", __name__)
            value = getattr(module, name)
            globals()[name] = value
            return value
    raise AttributeError(name)
