"""State persistence: JSON key-value store, backups and debounced saving."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vdash.errors import BackupValidationError, StateStoreError
from vdash.models.state import AppState, Theme

logger = logging.getLogger(__name__)

STATE_KEY = "appData"


class JSONStateStore:
    """Key-value JSON file holding the application state under one key.

    The file looks like ``{"appData": {...state document...}}``.
    """

    def __init__(self, path: Path, key: str = STATE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> dict[str, Any] | None:
        """Read the stored document.

        Returns:
            The stored state document, or None if nothing was saved yet

        Raises:
            StateStoreError: If the file exists but is not valid JSON
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StateStoreError(f"Failed to read state file: {self.path}") from exc

        if not isinstance(data, dict):
            raise StateStoreError(f"State file is not a JSON object: {self.path}")
        return data.get(self.key)

    def save(self, document: dict[str, Any]) -> None:
        """Write the state document, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({self.key: document}, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StateStoreError(f"Failed to write state file: {self.path}") from exc


def load_state(document: dict[str, Any] | None, default_theme: Theme = "dark") -> AppState:
    """Build state from a stored document, filling defaults.

    Missing fields take their defaults; a missing ``stagesConfig`` means
    the default template.

    Raises:
        StateStoreError: If the stored contents do not validate
    """
    document = {k: v for k, v in (document or {}).items() if v is not None}
    document.setdefault("theme", default_theme)
    try:
        return AppState.model_validate(document)
    except ValidationError as exc:
        raise StateStoreError(f"Stored state is invalid: {exc.error_count()} errors") from exc


# --- Backups ---


def backup_filename(today: date | None = None) -> str:
    return f"vdash_backup_{(today or date.today()).isoformat()}.json"


def export_backup(state: AppState, path: Path) -> Path:
    """Write a human-readable backup of the full state.

    Args:
        state: State to export
        path: Output file, or a directory to place a dated file in

    Returns:
        Path to the written backup
    """
    path = Path(path)
    if path.is_dir():
        path = path / backup_filename()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_document(), f, ensure_ascii=False, indent=2)

    logger.info("Exported backup to %s", path)
    return path


def parse_backup(data: Any) -> AppState:
    """Validate a decoded backup document.

    ``drafts`` and ``publishedVideos`` must both be lists before anything
    else is considered. ``stagesConfig`` and ``theme`` are optional.

    Raises:
        BackupValidationError: If the structure is invalid
    """
    if not isinstance(data, dict):
        raise BackupValidationError("Backup must be a JSON object")
    if not isinstance(data.get("drafts"), list) or not isinstance(
        data.get("publishedVideos"), list
    ):
        raise BackupValidationError("Invalid backup file structure: drafts and publishedVideos are required")

    document = {k: v for k, v in data.items() if v is not None}
    try:
        return AppState.model_validate(document)
    except ValidationError as exc:
        raise BackupValidationError(f"Invalid backup file contents: {exc.error_count()} errors") from exc


def read_backup(path: Path) -> AppState:
    """Read and validate a backup file.

    Raises:
        BackupValidationError: If the file is not valid JSON or has the wrong shape
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Backup file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BackupValidationError(f"Backup file is not valid JSON: {path}") from exc

    return parse_backup(data)


# --- Debounced saving ---


class DebouncedSaver:
    """Coalesces rapid changes into one save after a quiet interval.

    ``schedule()`` restarts the timer on every call. Once the interval passes
    with no further calls, ``snapshot`` runs on the event loop and its result
    is handed to ``write`` in a worker thread, so the loop keeps serving
    requests while the file is written. Writes run one at a time, in order.
    Without a running loop the save happens immediately.
    """

    def __init__(
        self,
        snapshot: Callable[[], dict[str, Any]],
        write: Callable[[dict[str, Any]], None],
        delay: float = 1.0,
    ) -> None:
        self._snapshot = snapshot
        self._write = write
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        """True while a save is scheduled or being written."""
        return self._handle is not None or (self._task is not None and not self._task.done())

    def schedule(self) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._save_now()
            return
        self._handle = loop.call_later(self.delay, self._start)

    def cancel(self) -> None:
        """Drop a scheduled save. A write already in progress still finishes."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        """Start a scheduled save now and wait for every write to finish."""
        if self._handle is not None:
            self.cancel()
            self._start()
        if self._task is not None:
            await self._task

    def _start(self) -> None:
        self._handle = None
        document = self._snapshot()
        self._task = asyncio.get_running_loop().create_task(
            self._write_after(self._task, document)
        )

    async def _write_after(
        self,
        previous: asyncio.Task[None] | None,
        document: dict[str, Any],
    ) -> None:
        if previous is not None:
            await previous
        try:
            await asyncio.to_thread(self._write, document)
        except Exception:
            logger.exception("Failed to save state")

    def _save_now(self) -> None:
        try:
            self._write(self._snapshot())
        except Exception:
            logger.exception("Failed to save state")
