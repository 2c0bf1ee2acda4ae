"""
Session context: the acting user and language for one CLI/app session.

The context is an explicit object handed to consumers; preferences are loaded
from a JSON file at startup and written back whenever they change.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from models.permissions import VisibilityScope
from models.users import User, UserDirectory

from .config import SUPPORTED_LANGUAGES
from .errors import InvalidInputError
from .i18n import Translator


logger = logging.getLogger(__name__)


class SessionPreferences(BaseModel):
    """Persisted session preferences."""
    language: str = "en"
    acting_user_id: Optional[str] = None

    @field_validator("language")
    @classmethod
    def validate_language(cls, v):
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {', '.join(SUPPORTED_LANGUAGES)}")
        return v


class SessionStore:
    """Reads and writes session preferences as JSON."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self, default_language: str = "en") -> SessionPreferences:
        """Load stored preferences; a missing or unreadable file yields defaults."""
        if not self.path.exists():
            return SessionPreferences(language=default_language)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return SessionPreferences.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return SessionPreferences(language=default_language)

    def save(self, preferences: SessionPreferences):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(preferences.model_dump(), f, indent=2)


class SessionContext:
    """Acting user, language and translation lookup for one session."""

    def __init__(
        self,
        directory: UserDirectory,
        translator: Optional[Translator] = None,
        preferences: Optional[SessionPreferences] = None,
        store: Optional[SessionStore] = None,
    ):
        self.directory = directory
        self.translator = translator or Translator()
        self.preferences = preferences or SessionPreferences()
        self.store = store

        # A stored user that has since left the directory is dropped
        acting_id = self.preferences.acting_user_id
        if acting_id is not None and acting_id not in self.directory:
            logger.warning(f"Stored acting user {acting_id} not in directory; clearing")
            self.preferences = self.preferences.model_copy(update={"acting_user_id": None})

    @classmethod
    def start(
        cls,
        directory: UserDirectory,
        store: SessionStore,
        translator: Optional[Translator] = None,
        default_language: str = "en",
    ) -> "SessionContext":
        """Create a context from the persisted preferences."""
        return cls(
            directory=directory,
            translator=translator,
            preferences=store.load(default_language=default_language),
            store=store,
        )

    @property
    def language(self) -> str:
        return self.preferences.language

    @property
    def acting_user(self) -> Optional[User]:
        if self.preferences.acting_user_id is None:
            return None
        return self.directory.get(self.preferences.acting_user_id)

    def set_language(self, language: str):
        if language not in SUPPORTED_LANGUAGES:
            raise InvalidInputError(f"Unsupported language: {language}")
        self.preferences = self.preferences.model_copy(update={"language": language})
        self._persist()

    def switch_user(self, user_id: str) -> User:
        """Act as another user from the directory; raises NotFoundError for unknown ids."""
        user = self.directory.get(user_id)
        self.preferences = self.preferences.model_copy(update={"acting_user_id": user.id})
        self._persist()
        logger.info("Switched acting user", extra={"acting_user_id": user.id})
        return user

    def sign_out(self):
        self.preferences = self.preferences.model_copy(update={"acting_user_id": None})
        self._persist()

    def visibility(self) -> VisibilityScope:
        """Visibility scope of the acting user."""
        if self.preferences.acting_user_id is None:
            raise InvalidInputError("No acting user selected for this session")
        return VisibilityScope.for_user(self.preferences.acting_user_id, self.directory)

    def t(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.translator.translate(key, language=self.language, params=params)

    def _persist(self):
        if self.store is not None:
            self.store.save(self.preferences)
