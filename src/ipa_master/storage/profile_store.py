"""Profile and game history persistence (JSON + fcntl.flock + atomic write)."""

import fcntl
import json
import os
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from ipa_master.errors import PersistenceFailure
from ipa_master.models.game import GameResult
from ipa_master.models.user_profile import UserProfile

logger = structlog.get_logger()

DEFAULT_NAMESPACE = "ipa-translation-master"
PROFILE_FILENAME = "profile.json"
HISTORY_FILENAME = "game_history.json"
LOCK_FILENAME = ".store.lock"

_history_adapter = TypeAdapter(list[GameResult])


class ProfileStore:
    """Durable storage for one player's profile and game history.

    Args:
        data_dir: Base data directory.
        namespace: Sub-directory that keys this game's data.
        default_name: Player name for a freshly created profile.
    """

    def __init__(
        self,
        data_dir: Path,
        namespace: str = DEFAULT_NAMESPACE,
        default_name: str = "Player",
    ):
        self.root = Path(data_dir) / namespace
        self.default_name = default_name

    @property
    def profile_path(self) -> Path:
        return self.root / PROFILE_FILENAME

    @property
    def history_path(self) -> Path:
        return self.root / HISTORY_FILENAME

    @contextmanager
    def _locked(self, exclusive: bool) -> Iterator[None]:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            lock_file = open(self.root / LOCK_FILENAME, "w")
        except OSError as e:
            raise PersistenceFailure(f"Cannot open store: {e}", str(self.root)) from e
        with lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
            try:
                yield
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)

    def _read_json(self, path: Path) -> Any | None:
        if not path.exists():
            return None
        try:
            with self._locked(exclusive=False):
                return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("store_read_failed", path=str(path), error=str(e))
            raise PersistenceFailure(f"Cannot read {path.name}: {e}", str(path)) from e

    def _write_json(self, path: Path, data: str) -> None:
        try:
            with self._locked(exclusive=True):
                with tempfile.NamedTemporaryFile(
                    "w", dir=self.root, delete=False, suffix=".json", encoding="utf-8"
                ) as tmp:
                    tmp.write(data)
                os.replace(tmp.name, path)
        except OSError as e:
            logger.error("store_write_failed", path=str(path), error=str(e))
            raise PersistenceFailure(f"Cannot write {path.name}: {e}", str(path)) from e

    def new_profile(self) -> UserProfile:
        return UserProfile(name=self.default_name)

    def read(self) -> UserProfile:
        """Load the profile, or a fresh one if none is stored."""
        data = self._read_json(self.profile_path)
        if data is None:
            return self.new_profile()
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            raise PersistenceFailure(f"Invalid profile data: {e}", str(self.profile_path)) from e

    def write(self, profile: UserProfile) -> None:
        profile.updated_at = datetime.now()
        self._write_json(self.profile_path, profile.model_dump_json(indent=2))
        logger.debug("profile_saved", level=profile.level, experience=profile.experience)

    def read_history(self) -> list[GameResult]:
        data = self._read_json(self.history_path)
        if data is None:
            return []
        try:
            return _history_adapter.validate_python(data)
        except ValidationError as e:
            raise PersistenceFailure(f"Invalid game history: {e}", str(self.history_path)) from e

    def write_history(self, history: Sequence[GameResult]) -> None:
        payload = _history_adapter.dump_json(list(history), indent=2).decode("utf-8")
        self._write_json(self.history_path, payload)

    def rename(self, name: str) -> UserProfile:
        profile = self.read()
        profile.name = name
        self.write(profile)
        return profile

    def reset(self) -> UserProfile:
        """Replace the profile with a fresh one and clear the history."""
        profile = self.new_profile()
        self.write(profile)
        self.write_history([])
        logger.info("profile_reset")
        return profile

    def export(self) -> str:
        """Pretty JSON of the profile and history together."""
        data = {
            "profile": self.read().model_dump(mode="json"),
            "game_history": [game.model_dump(mode="json") for game in self.read_history()],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
