"""
Configuration management for Studio CLI.

The CLI stores a separate session per API URL, so one machine can be
signed in to a local dev server and a deployed one at the same time.

  Config structure:
  {
    "environments": {
      "http://localhost:8000": {
        "session": "<jwt>",
        "username": "ada"
      }
    },
    "default_url": "http://localhost:8000"
  }

API URL resolution order:
  1. STUDIO_API_URL environment variable
  2. --api-url command line flag
  3. default_url from config file
  4. Fallback: http://localhost:8000

STUDIO_SESSION, when set, replaces the stored session for every environment.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class Config:
    """Config manager for Studio CLI with multi-environment support."""

    def __init__(self, api_url_override: str | None = None, config_dir: Path | None = None):
        """
        Initialize config.

        Args:
            api_url_override: Optional --api-url flag value
            config_dir: Where config.json lives (default ~/.studio)
        """
        self.config_dir = config_dir or Path.home() / ".studio"
        self.config_file = self.config_dir / "config.json"
        self._data: dict = {}
        self._api_url_override = api_url_override
        self._load()

    def _load(self):
        """Load config from disk. A corrupt file is treated as empty."""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    self._data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
                self._data = {}

        self._data.setdefault("environments", {})

    def _save(self):
        """Save config to disk, readable by the owner only."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._data, f, indent=2)
        self.config_file.chmod(0o600)

    @property
    def api_url(self) -> str:
        env_url = os.environ.get("STUDIO_API_URL")
        if env_url:
            return env_url.rstrip("/")
        if self._api_url_override:
            return self._api_url_override.rstrip("/")
        return self._data.get("default_url", DEFAULT_API_URL).rstrip("/")

    def _get_env(self) -> dict:
        return self._data["environments"].get(self.api_url, {})

    def _set_env(self, key: str, value):
        self._data["environments"].setdefault(self.api_url, {})[key] = value
        self._save()

    @property
    def session(self) -> str | None:
        """Session JWT for the current environment."""
        return os.environ.get("STUDIO_SESSION") or self._get_env().get("session")

    @session.setter
    def session(self, value: str):
        self._set_env("session", value)

    @property
    def username(self) -> str | None:
        return self._get_env().get("username")

    @username.setter
    def username(self, value: str):
        self._set_env("username", value)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session)

    def clear_environment(self, url: str | None = None):
        """Forget the session for one environment (the current one by default)."""
        target_url = (url or self.api_url).rstrip("/")
        if target_url in self._data["environments"]:
            del self._data["environments"][target_url]
            self._save()

    def clear_all(self):
        """Forget every session and delete the config file."""
        self._data = {"environments": {}}
        if self.config_file.exists():
            self.config_file.unlink()

    def list_environments(self) -> list[dict]:
        """Signed-in environments as dicts with url, username, is_current."""
        current = self.api_url
        return [
            {"url": url, "username": env.get("username"), "is_current": url == current}
            for url, env in self._data["environments"].items()
            if env.get("session")
        ]
