"""Shared-password gate for commands that change the timeline."""

from __future__ import annotations

import hmac
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .logger import get_logger

logger = get_logger()

PASSWORD_ENV_VAR = "AOELINE_PASSWORD"
DEFAULT_PASSWORD = "defaultPassword"
AUTHENTICATED_MARKER = "authenticated"


class Authenticator:
    """Checks the access password and remembers a successful login.

    The expected password is taken from the constructor, then from the
    AOELINE_PASSWORD environment variable (a .env file is honored), then
    falls back to a default. When ``state_path`` is set, a successful login
    is written there so later processes stay logged in until ``logout``.
    """

    def __init__(self, password: str | None = None, state_path: Path | None = None) -> None:
        if password is None:
            load_dotenv(find_dotenv(usecwd=True))
            password = os.getenv(PASSWORD_ENV_VAR) or DEFAULT_PASSWORD
        self._password = password
        self.state_path = state_path
        self._authenticated = self._read_state()

    def _read_state(self) -> bool:
        if self.state_path is None or not self.state_path.exists():
            return False
        return self.state_path.read_text(encoding="utf-8").strip() == AUTHENTICATED_MARKER

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def login(self, candidate: str | None) -> bool:
        """Try a password. Blank input is refused without checking."""
        if not candidate or not candidate.strip():
            return False

        if not hmac.compare_digest(candidate.encode(), self._password.encode()):
            logger.checks("Login refused: wrong password")
            return False

        self._authenticated = True
        if self.state_path is not None:
            self.state_path.write_text(AUTHENTICATED_MARKER + "\n", encoding="utf-8")
        logger.changes("Logged in")
        return True

    def logout(self) -> None:
        self._authenticated = False
        if self.state_path is not None and self.state_path.exists():
            self.state_path.unlink()
        logger.changes("Logged out")
