"""Login session cache: Playwright storage state saved per storefront user.

Sessions are stored under <root>/sessions/<key>/ with:
- storage_state.json: login cookies after a successful login, in Playwright
  storage-state form
- meta.json: username, target URL, created/last-used timestamps
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import platform
import re
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]+")


def session_key(username: str, password: str) -> str:
    """Derive the cache key for a login.

    The password is folded in as a short digest, so changed credentials
    never restore a session created with the old ones.
    """
    digest = hashlib.sha256(f"{username}\0{password}".encode()).hexdigest()[:12]
    safe_user = _UNSAFE_CHARS_RE.sub("_", username).strip("_") or "user"
    return f"sauce-login-{safe_user}-{digest}"


class LoginSessionCache:
    """Stores and restores storefront login sessions on disk."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.sessions_dir = root / "sessions"

    def save(
        self,
        key: str,
        storage_state: dict[str, Any],
        *,
        username: str,
        target_url: str,
    ) -> Path:
        """Save a session's storage state. Returns the session directory."""
        _validate_key(key)
        session_dir = self.sessions_dir / key
        session_dir.mkdir(parents=True, exist_ok=True)

        state_path = session_dir / "storage_state.json"
        state_path.write_text(
            json.dumps(storage_state, indent=2, default=str),
            encoding="utf-8",
        )
        _set_secure_permissions(state_path)

        now = datetime.now(UTC).isoformat()
        meta = {
            "key": key,
            "username": username,
            "target_url": target_url,
            "created_at": now,
            "last_used_at": now,
        }
        (session_dir / "meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
        logger.debug("Saved login session %s", key)
        return session_dir

    def load(self, key: str) -> dict[str, Any] | None:
        """Load a session's storage state. Returns None if not cached."""
        _validate_key(key)
        state_path = self.sessions_dir / key / "storage_state.json"
        if not state_path.exists():
            return None
        try:
            loaded = json.loads(state_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt session state at %s", state_path)
            return None
        return loaded if isinstance(loaded, dict) else None

    def get_meta(self, key: str) -> dict[str, Any] | None:
        _validate_key(key)
        meta_path = self.sessions_dir / key / "meta.json"
        if not meta_path.exists():
            return None
        try:
            loaded = json.loads(meta_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt session metadata at %s", meta_path)
            return None
        return loaded if isinstance(loaded, dict) else None

    def touch(self, key: str) -> None:
        """Update the last_used_at timestamp for a session."""
        meta = self.get_meta(key)
        if meta is None:
            return
        meta["last_used_at"] = datetime.now(UTC).isoformat()
        meta_path = self.sessions_dir / key / "meta.json"
        meta_path.write_text(json.dumps(meta, indent=2), encoding="utf-8")

    def exists(self, key: str) -> bool:
        _validate_key(key)
        return (self.sessions_dir / key / "storage_state.json").exists()

    def list_sessions(self) -> list[dict[str, Any]]:
        """List cached sessions with their metadata."""
        if not self.sessions_dir.exists():
            return []

        results: list[dict[str, Any]] = []
        for entry in sorted(self.sessions_dir.iterdir()):
            if not entry.is_dir():
                continue
            results.append({
                "key": entry.name,
                "has_storage_state": (entry / "storage_state.json").exists(),
                **(self.get_meta(entry.name) or {}),
            })
        return results

    def clear(self, key: str) -> bool:
        """Delete a cached session. Returns True if it existed."""
        _validate_key(key)
        session_dir = self.sessions_dir / key
        if not session_dir.exists():
            return False
        shutil.rmtree(session_dir)
        return True

    def clear_all(self) -> int:
        """Delete every cached session. Returns how many were removed."""
        removed = 0
        for entry in self.list_sessions():
            if self.clear(entry["key"]):
                removed += 1
        return removed


def _validate_key(key: str) -> None:
    """Validate a session key is safe for filesystem use."""
    if not key or not key.strip():
        raise ValueError("Session key cannot be empty")
    if "/" in key or "\\" in key or ".." in key:
        raise ValueError("Session key cannot contain path separators or '..'")
    if key.startswith("."):
        raise ValueError("Session key cannot start with '.'")


def _set_secure_permissions(path: Path) -> None:
    """Set file permissions to 0600 on POSIX systems."""
    if platform.system() == "Windows":
        return
    try:
        os.chmod(path, 0o600)
    except OSError:
        logger.warning("Could not set secure permissions on %s", path)
