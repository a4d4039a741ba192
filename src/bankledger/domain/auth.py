"""Admin login gate.

Credentials come from a provider supplied by the caller; nothing is
hardcoded here.
"""

import hmac
import os
from abc import ABC, abstractmethod
from typing import Optional

ADMIN_USER_ENV = "BANKLEDGER_ADMIN_USER"
ADMIN_PASSWORD_ENV = "BANKLEDGER_ADMIN_PASSWORD"


class CredentialProvider(ABC):
    """Source of the expected admin credentials."""

    @abstractmethod
    def get_credentials(self) -> Optional[tuple[str, str]]:
        """Return (username, password), or None if none are configured."""
        pass


class EnvCredentialProvider(CredentialProvider):
    """Reads admin credentials from environment variables."""

    def __init__(self, user_var: str = ADMIN_USER_ENV, password_var: str = ADMIN_PASSWORD_ENV):
        self.user_var = user_var
        self.password_var = password_var

    def get_credentials(self) -> Optional[tuple[str, str]]:
        username = os.environ.get(self.user_var)
        password = os.environ.get(self.password_var)
        if not username or password is None:
            return None
        return username, password


class StaticCredentialProvider(CredentialProvider):
    """Fixed credentials, for embedding callers and tests."""

    def __init__(self, username: str, password: str):
        self._credentials = (username, password)

    def get_credentials(self) -> Optional[tuple[str, str]]:
        return self._credentials


def authenticate(provider: CredentialProvider, username: str, password: str) -> bool:
    """Check a login attempt against the provider.

    Returns False when the provider has no credentials configured.
    """
    expected = provider.get_credentials()
    if expected is None:
        return False
    expected_user, expected_password = expected
    user_ok = hmac.compare_digest(username.encode("utf-8"), expected_user.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
    return user_ok and password_ok
