"""Editor session state."""

from __future__ import annotations

from kvedit.editor.session import EditorSession, LoadStatus

__all__ = ["EditorSession", "LoadStatus"]
