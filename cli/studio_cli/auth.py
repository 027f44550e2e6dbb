"""Login and logout for Studio CLI."""

from __future__ import annotations

import getpass

from engine.kernel.errors import StudioError
from studio_cli.client import ApiClient
from studio_cli.config import Config


async def login(config: Config, username: str | None = None, password: str | None = None) -> bool:
    """
    Sign in with username and password and store the session.

    Prompts for whatever was not passed. Returns True if successful.
    """
    username = username or input("Username: ").strip()
    password = password or getpass.getpass("Password: ")

    async with ApiClient(config.api_url) as client:
        try:
            user = await client.login(username, password)
        except StudioError as e:
            print(f"Login failed: {e}")
            return False

    config.session = client.session
    config.username = user["username"]
    print(f"Signed in to {config.api_url} as {user['username']}")
    print(f"Session saved to {config.config_file}")
    return True


async def logout(config: Config, logout_all: bool = False) -> bool:
    """
    Forget stored sessions and clear the server cookie.

    Args:
        config: Config instance
        logout_all: If True, clear all environments. If False, only current.
    """
    if logout_all:
        envs = config.list_environments()
        if not envs:
            print("No signed-in environments.")
            return True
        for env in envs:
            print(f"  Logging out of {env['url']} ({env.get('username') or 'unknown'})")
        config.clear_all()
        print("Logged out of all environments.")
        return True

    if not config.is_authenticated:
        print(f"Not logged in to {config.api_url}")
        return False

    username = config.username or "unknown"
    async with ApiClient(config.api_url, config.session) as client:
        try:
            await client.post("/auth/logout", {})
        except StudioError as e:
            # The local session is dropped either way
            print(f"  Warning: server logout failed: {e}")

    config.clear_environment()
    print(f"Logged out of {config.api_url} ({username})")
    return True
