"""
Persistence for user preferences (credential mode and value).

Loaded when a browser session starts and written only on an explicit save.
The generation flow never mutates settings.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Credential settings. `custom` mode needs a non-empty key."""
    mode: Literal["default", "custom"] = "default"
    key: str = ""


class SaveResult(BaseModel):
    success: bool
    error: Optional[str] = None


def check_settings(settings: Settings) -> SaveResult:
    if settings.mode == "custom" and not settings.key.strip():
        return SaveResult(success=False, error="API Key kustom tidak boleh kosong.")
    return SaveResult(success=True)


class SettingsStore(ABC):
    """Settings persistence interface injected into the coordinator."""

    @abstractmethod
    def load(self) -> Settings:
        pass

    @abstractmethod
    def save(self, settings: Settings) -> SaveResult:
        pass


class InMemorySettingsStore(SettingsStore):
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.save_count = 0

    def load(self) -> Settings:
        return self.settings.model_copy()

    def save(self, settings: Settings) -> SaveResult:
        result = check_settings(settings)
        if result.success:
            self.settings = settings.model_copy()
            self.save_count += 1
        return result


class BrowserSettingsStore(SettingsStore):
    """
    Settings held in the visitor's browser.

    `data` is the plain dict kept in a `gr.BrowserState`; handlers pass it in
    and write `store.data` back as an output after a save. Nothing is shared
    between browser sessions.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data) if isinstance(data, dict) else Settings().model_dump()

    def load(self) -> Settings:
        try:
            return Settings.model_validate(self.data)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring unreadable browser settings: {e}")
            return Settings()

    def save(self, settings: Settings) -> SaveResult:
        result = check_settings(settings)
        if result.success:
            self.data = settings.model_dump()
        return result
