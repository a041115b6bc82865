"""Load/save of the single persisted settings document."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from switchdesk.core.errors import ConfigStoreError
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.schemas import ConfigDocument

logger = logging.getLogger(__name__)


class ConfigStore:
    """Reads and writes ``path`` and keeps the current document cached.

    Load failures fall back to the default document (logged, not raised);
    save failures raise ConfigStoreError.
    """

    def __init__(self, path: Path, hub: BroadcastHub) -> None:
        self.path = Path(path)
        self.hub = hub
        self._current: ConfigDocument | None = None

    @property
    def current(self) -> ConfigDocument:
        if self._current is None:
            self._current = self.load()
        return self._current

    def load(self) -> ConfigDocument:
        if not self.path.exists():
            return ConfigDocument()
        try:
            return ConfigDocument.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Could not read config {self.path}: {type(e).__name__}: {e}")
            return ConfigDocument()

    def ensure(self) -> ConfigDocument:
        """Startup: load the document, writing the defaults if the file is absent."""
        existed = self.path.exists()
        self._current = self.load()
        if existed:
            logger.info(f"Config loaded from {self.path}")
            return self._current
        try:
            self._write(self._current)
            logger.info(f"Default config created at {self.path}")
        except ConfigStoreError as e:
            logger.warning(f"Default config not persisted: {e}")
        return self._current

    def _write(self, document: ConfigDocument) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigStoreError(f"Failed to write config {self.path}: {e}") from e

    async def save(self, document: ConfigDocument) -> ConfigDocument:
        """Replace the whole document on disk and in memory, then announce it."""
        self._write(document)
        self._current = document
        logger.info("Configuration saved")
        await self.hub.broadcast(make_event(EventType.CONFIG_UPDATED, config=document.model_dump()))
        return document
