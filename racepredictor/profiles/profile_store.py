"""
Profile Store

Named athlete profile snapshots: athlete inputs, workout list and the
last computed predictions. Storage sits behind ProfileRepository so
in-memory and file-backed variants are interchangeable.

Without PROFILE_STORE_PATH the store lives in process memory, so each
Celery worker process sees only the profiles it saved itself. Set
PROFILE_STORE_PATH whenever the worker runs more than one process.
"""

import fcntl
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..predictions.workouts import new_id

logger = logging.getLogger(__name__)


@dataclass
class AthleteProfile:
    """Saved snapshot of an athlete's inputs and predictions"""

    name: str
    athlete: Dict[str, Any]  # type, sex, age, pr {event, time, date}
    workouts: List[Dict[str, Any]] = field(default_factory=list)
    predictions: List[Dict[str, Any]] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created: str = field(default_factory=lambda: date.today().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AthleteProfile":
        return cls(
            name=data["name"],
            athlete=data.get("athlete", {}),
            workouts=data.get("workouts", []),
            predictions=data.get("predictions", []),
            id=data.get("id") or new_id(),
            created=data.get("created") or date.today().isoformat(),
        )


def predicted_mile(profile: AthleteProfile) -> Optional[float]:
    """Blended mile prediction stored in a profile, if any."""
    for prediction in profile.predictions:
        if prediction.get("event") == "mile":
            return prediction.get("blended_seconds")
    return None


class ProfileRepository(ABC):
    """Save/list/delete contract for profile storage"""

    @abstractmethod
    def save(self, profile: AthleteProfile) -> str:
        """Store a profile and return its id."""

    @abstractmethod
    def list(self) -> List[AthleteProfile]:
        """All profiles, newest first."""

    @abstractmethod
    def delete(self, profile_id: str) -> None:
        """Remove a profile; unknown ids are ignored."""


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self):
        self._profiles: List[AthleteProfile] = []
        self._lock = threading.Lock()

    def save(self, profile: AthleteProfile) -> str:
        with self._lock:
            self._profiles = [profile] + [p for p in self._profiles if p.id != profile.id]
        return profile.id

    def list(self) -> List[AthleteProfile]:
        return list(self._profiles)

    def delete(self, profile_id: str) -> None:
        with self._lock:
            self._profiles = [p for p in self._profiles if p.id != profile_id]


class JsonFileProfileRepository(ProfileRepository):
    """
    Profiles persisted as a JSON array in a single file.

    Each read-modify-write holds an exclusive flock on a sibling
    ".lock" file. Writes go to a unique temporary file that replaces
    the target, so readers never see a partially written store.
    """

    def __init__(self, path: os.PathLike):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def _locked(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a") as lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError as e:
            logger.warning(f"Profile store {self.path} is corrupt, starting empty: {e}")
            return []
        return data if isinstance(data, list) else []

    def _write(self, records: List[Dict[str, Any]]) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as tmp_file:
            json.dump(records, tmp_file, indent=2)
        try:
            os.replace(tmp_file.name, self.path)
        except OSError:
            os.unlink(tmp_file.name)
            raise

    def save(self, profile: AthleteProfile) -> str:
        with self._locked():
            records = [r for r in self._load() if r.get("id") != profile.id]
            self._write([profile.to_dict()] + records)
        logger.info(f"Saved profile {profile.id} ({profile.name}) to {self.path}")
        return profile.id

    def list(self) -> List[AthleteProfile]:
        with self._locked():
            records = self._load()
        return [AthleteProfile.from_dict(r) for r in records]

    def delete(self, profile_id: str) -> None:
        with self._locked():
            records = self._load()
            remaining = [r for r in records if r.get("id") != profile_id]
            if len(remaining) == len(records):
                return
            self._write(remaining)
        logger.info(f"Deleted profile {profile_id} from {self.path}")


_memory_repository = InMemoryProfileRepository()
_warned_memory_store = False


def get_profile_repository() -> ProfileRepository:
    """
    Repository configured by PROFILE_STORE_PATH.

    Falls back to a process-local in-memory store when unset.
    """
    global _warned_memory_store

    path = os.getenv("PROFILE_STORE_PATH")
    if path:
        return JsonFileProfileRepository(path)

    if not _warned_memory_store:
        logger.warning(
            "PROFILE_STORE_PATH is not set; profiles are kept in this process only "
            "and are not shared between worker processes"
        )
        _warned_memory_store = True
    return _memory_repository
