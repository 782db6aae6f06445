"""Learning session storage.

A single-user key-value store holding whole sessions keyed by id plus the
last onboarding input. Every write replaces the full record. Storage
problems are logged and treated as "no data"; nothing here raises.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from learning.models.session import LearningSession, PersonalizationData, utcnow

logger = logging.getLogger(__name__)

SESSIONS_KEY = "sessions"
LAST_INPUT_KEY = "last_input"


class SessionStore(ABC):
    """Store for learning sessions backed by one JSON-compatible document."""

    @abstractmethod
    def _read_document(self) -> dict[str, Any]:
        """Return the stored document, or {} when nothing can be read."""

    @abstractmethod
    def _write_document(self, document: dict[str, Any]) -> None:
        """Replace the stored document."""

    @staticmethod
    def _sessions_in(document: dict[str, Any]) -> dict[str, Any]:
        sessions = document.get(SESSIONS_KEY)
        return sessions if isinstance(sessions, dict) else {}

    def save(self, session: LearningSession) -> LearningSession:
        """
        Save a session, overwriting any previous record with the same id.

        Args:
            session: Session to persist

        Returns:
            The session as stored, with updated_at refreshed
        """
        stored = session.model_copy(update={"updated_at": utcnow()})
        document = self._read_document()
        sessions = self._sessions_in(document)
        sessions[stored.id] = stored.model_dump(mode="json")
        document[SESSIONS_KEY] = sessions
        self._write_document(document)
        return stored

    def load(self, session_id: str) -> Optional[LearningSession]:
        """
        Retrieve a session by id.

        Returns:
            LearningSession if found and readable, None otherwise
        """
        data = self._sessions_in(self._read_document()).get(session_id)
        if data is None:
            return None
        try:
            return LearningSession.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Stored session {session_id} is corrupt, ignoring it: {e.error_count()} errors")
            return None

    def list_all(self) -> list[LearningSession]:
        """All readable sessions, most recently updated first."""
        sessions = []
        for session_id in self._sessions_in(self._read_document()):
            session = self.load(session_id)
            if session is not None:
                sessions.append(session)
        return sorted(sessions, key=lambda s: s.updated_at, reverse=True)

    def delete(self, session_id: str) -> None:
        document = self._read_document()
        sessions = self._sessions_in(document)
        if session_id in sessions:
            del sessions[session_id]
            document[SESSIONS_KEY] = sessions
            self._write_document(document)

    def save_last_input(self, personalization: PersonalizationData) -> None:
        """Remember the last onboarding input for quick regeneration."""
        document = self._read_document()
        document[LAST_INPUT_KEY] = personalization.model_dump(mode="json")
        self._write_document(document)

    def load_last_input(self) -> Optional[PersonalizationData]:
        data = self._read_document().get(LAST_INPUT_KEY)
        if data is None:
            return None
        try:
            return PersonalizationData.model_validate(data)
        except ValidationError:
            logger.warning("Stored onboarding input is corrupt, ignoring it")
            return None


class InMemorySessionStore(SessionStore):
    """Process-local store, used in tests and when no file is configured."""

    def __init__(self):
        self._document: dict[str, Any] = {}

    def _read_document(self) -> dict[str, Any]:
        # Round-trip through JSON so callers never share objects with the store
        return json.loads(json.dumps(self._document))

    def _write_document(self, document: dict[str, Any]) -> None:
        self._document = json.loads(json.dumps(document))


class JsonFileSessionStore(SessionStore):
    """Store kept in a single local JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_document(self) -> dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read session store at {self.path}: {e}")
            return {}

        if not isinstance(document, dict):
            logger.warning(f"Session store at {self.path} is not a JSON object, ignoring it")
            return {}
        return document

    def _write_document(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Could not write session store at {self.path}: {e}")
