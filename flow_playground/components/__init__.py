from .monaco_editor import MonacoEditor

__all__ = ["MonacoEditor"]
