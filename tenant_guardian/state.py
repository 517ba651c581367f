"""
state.py - Authentication Flag and User Profile Storage

AppState is loaded once at start-up and written wholesale on explicit
actions (login, logout, profile save). Storage goes through a small
key/value interface so the backend can be swapped:
- InMemoryStore: tests and throwaway sessions
- JsonFileStore: one JSON document on disk, survives restarts

This is demo authentication only: one fixed credential and a stored flag.
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from tenant_guardian import config


logger = logging.getLogger(__name__)

AUTH_KEY = "auth_token"
PROFILE_KEY = "user_profile"


# =============================================================================
# KEY/VALUE STORES
# =============================================================================

class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Store backed by a single JSON file.
    Every write rewrites the whole file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("State file %s is corrupt, starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target, then swap it in
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


# =============================================================================
# PROFILE
# =============================================================================

@dataclass(frozen=True)
class UserProfile:
    """
    Tenant profile shown on the profile page.
    Stored with camelCase keys.
    """
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    occupation: str = ""
    employer: str = ""
    income: str = ""
    emergency_name: str = ""
    emergency_phone: str = ""
    bio: str = ""

    def completion(self) -> int:
        """Percentage of filled-in fields, rounded."""
        values = [getattr(self, f.name) for f in fields(self)]
        filled = sum(1 for v in values if v and str(v).strip())
        return round(filled / len(values) * 100)

    def to_dict(self) -> Dict[str, str]:
        return {_camel(k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "UserProfile":
        known = {_camel(f.name): f.name for f in fields(cls)}
        values = {known[k]: str(v or "") for k, v in data.items() if k in known}
        return cls(**values)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def default_profile() -> UserProfile:
    return UserProfile(full_name="Tenant User", email=config.DEMO_EMAIL)


# =============================================================================
# APPLICATION STATE
# =============================================================================

class AppState:
    """
    Auth flag and profile, mirrored to a KeyValueStore.

    Attributes:
        is_authenticated: Whether the stored auth flag is set
        profile: Current user profile
    """

    def __init__(
        self,
        store: KeyValueStore,
        demo_email: Optional[str] = None,
        demo_password: Optional[str] = None
    ):
        self.store = store
        self.demo_email = demo_email or config.DEMO_EMAIL
        self.demo_password = demo_password or config.DEMO_PASSWORD
        self.is_authenticated = False
        self.profile = default_profile()
        self.load()

    def load(self) -> None:
        """Read both records from the store."""
        self.is_authenticated = self.store.get(AUTH_KEY) == "true"

        raw = self.store.get(PROFILE_KEY)
        if raw:
            try:
                self.profile = UserProfile.from_dict(json.loads(raw))
                return
            except (json.JSONDecodeError, AttributeError, TypeError):
                logger.warning("Stored profile is unreadable, using defaults")
        self.profile = default_profile()

    def login(self, email: str, password: str) -> bool:
        """Check the demo credential; set the auth flag on success."""
        if email.strip().lower() != self.demo_email.lower() or password != self.demo_password:
            logger.info("Rejected login for %s", email)
            return False
        self._set_authenticated()
        return True

    def login_with_account(self, name: str, email: str) -> UserProfile:
        """
        Mock third-party sign-in: the chosen account becomes the profile.
        Used for both sign-in and sign-up.
        """
        profile = UserProfile(
            full_name=name,
            email=email,
            bio="Logged in via Google Secure Auth"
        )
        self.save_profile(profile)
        self._set_authenticated()
        return profile

    def logout(self) -> None:
        self.store.delete(AUTH_KEY)
        self.is_authenticated = False

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile as a whole."""
        self.store.set(PROFILE_KEY, json.dumps(profile.to_dict(), ensure_ascii=False))
        self.profile = profile

    def _set_authenticated(self) -> None:
        self.store.set(AUTH_KEY, "true")
        self.is_authenticated = True
