"""Editor session: selection, dirty tracking and save/rename/delete flows.

Selection and body loading are tracked separately: a key can be selected
while its body failed to load, and ``status`` says which case applies.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from kvedit.client.api_client import APIError, KVEditClient
from kvedit.grouping import KeyGroup, group_keys
from kvedit.snapshots.cache import SnapshotCache

log = logging.getLogger(__name__)

SAVE_SHORTCUT_KEY = "s"


class LoadStatus(str, Enum):
    """Load state of the current key's body."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def _strip_slashes(key: str) -> str:
    # Display form: the API applies the full normalization rules.
    return key.strip("/")


class EditorSession:
    """State for one editing session against a kvedit server."""

    def __init__(self, client: KVEditClient, snapshots: SnapshotCache | None = None) -> None:
        self._client = client
        self._snapshots = snapshots
        self.keys: list[str] = []
        self.current_key = ""
        self.body = ""
        self.saved_body = ""
        self.status = LoadStatus.IDLE
        self.error: APIError | None = None

    @property
    def dirty(self) -> bool:
        """True when the body has edits that were not saved."""
        return self.body != self.saved_body

    def groups(self) -> list[KeyGroup]:
        return group_keys(self.keys)

    def refresh(self) -> list[str]:
        """Reload the key listing."""
        self.keys = self._client.list_keys()
        return self.keys

    def bootstrap(self, initial_key: str = "") -> None:
        """Load the listing, then open *initial_key* if given."""
        self.refresh()
        if initial_key:
            self.select(initial_key)

    def select(self, key: str) -> LoadStatus:
        """Make *key* current and fetch its body.

        On fetch failure the key stays selected, the body is left as it was,
        and the status becomes ``FAILED`` with ``error`` set.
        """
        self.current_key = _strip_slashes(key)
        self.error = None
        if not self.current_key:
            self.status = LoadStatus.IDLE
            return self.status

        self.status = LoadStatus.LOADING
        try:
            text = self._client.get(self.current_key)
        except APIError as e:
            log.warning("Could not load %s: %s", self.current_key, e)
            self.status = LoadStatus.FAILED
            self.error = e
            return self.status

        self.body = text
        self.saved_body = text
        self.status = LoadStatus.LOADED
        return self.status

    def edit(self, body: str) -> None:
        self.body = body

    def save(self) -> None:
        """Upload the current body, then snapshot it locally and refresh the listing."""
        key = self.current_key
        body = self.body
        self._client.upsert(key, body)

        if self._snapshots is not None:
            self._snapshots.save(key, body)

        self.saved_body = body
        if self.status is LoadStatus.FAILED:
            self.status = LoadStatus.LOADED
            self.error = None
        self.refresh()

    def rename(self, new_key: str | None) -> bool:
        """Move the current key to *new_key* and select it.

        Returns False without doing anything when *new_key* is empty.
        """
        if not new_key:
            return False
        self._client.move(self.current_key, new_key)
        self.refresh()
        self.select(new_key)
        return True

    def delete(self, confirm: Callable[[], bool]) -> bool:
        """Delete the current key once *confirm* agrees, then clear the selection."""
        if not confirm():
            return False
        self._client.delete(self.current_key)
        self.refresh()
        self.select("")
        return True

    def handle_shortcut(self, key: str, *, ctrl: bool = False, meta: bool = False) -> bool:
        """Handle a key press; Ctrl+S / Cmd+S saves.

        Returns True when the press was consumed, meaning the caller must
        suppress its own default action for it.
        """
        if (ctrl or meta) and key.lower() == SAVE_SHORTCUT_KEY:
            self.save()
            return True
        return False
