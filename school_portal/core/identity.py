# school_portal/core/identity.py
import base64
import json
import logging
from typing import Dict, Optional, Protocol

import firebase_admin
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool

from school_portal.core.config import Settings

logger = logging.getLogger(__name__)


class AccountNotFound(Exception):
    pass


class IdentityProvider(Protocol):
    async def get_uid_by_email(self, email: str) -> str:
        """Return the account id for ``email`` or raise AccountNotFound."""
        ...


def _firebase_credentials(settings: Settings) -> credentials.Certificate:
    if settings.FIREBASE_CREDENTIALS_BASE64:
        cred_json = json.loads(base64.b64decode(settings.FIREBASE_CREDENTIALS_BASE64))
        return credentials.Certificate(cred_json)
    if settings.FIREBASE_CREDENTIALS_FILE:
        return credentials.Certificate(settings.FIREBASE_CREDENTIALS_FILE)
    raise ValueError("Missing Firebase credentials.")


class FirebaseIdentityProvider:
    def __init__(self, settings: Settings) -> None:
        # firebase_admin keeps a registry of apps; reuse the default one if present
        try:
            self.app = firebase_admin.get_app()
        except ValueError:
            self.app = firebase_admin.initialize_app(_firebase_credentials(settings))

    async def get_uid_by_email(self, email: str) -> str:
        try:
            user = await run_in_threadpool(auth.get_user_by_email, email, app=self.app)
        except auth.UserNotFoundError:
            raise AccountNotFound(email)
        return user.uid


class InMemoryIdentityProvider:
    def __init__(self, accounts: Optional[Dict[str, str]] = None) -> None:
        self.accounts: Dict[str, str] = dict(accounts or {})

    def register(self, email: str, uid: str) -> None:
        self.accounts[email] = uid

    async def get_uid_by_email(self, email: str) -> str:
        try:
            return self.accounts[email]
        except KeyError:
            raise AccountNotFound(email)
