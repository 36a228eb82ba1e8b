"""
Profiles Module

Storage of named athlete profile snapshots.
"""

from .profile_store import (
    AthleteProfile,
    get_profile_repository,
    InMemoryProfileRepository,
    JsonFileProfileRepository,
    predicted_mile,
    ProfileRepository,
)

__all__ = [
    "AthleteProfile",
    "ProfileRepository",
    "InMemoryProfileRepository",
    "JsonFileProfileRepository",
    "get_profile_repository",
    "predicted_mile",
]
