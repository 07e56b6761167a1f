# school_portal/services/auth_service.py
from typing import Optional

from school_portal.core.errors import InvalidCredentials, StoreError
from school_portal.core.identity import AccountNotFound, IdentityProvider


class AuthService:
    def __init__(self, identity: IdentityProvider) -> None:
        self.identity = identity

    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        """
        Resolve the identity-provider account for ``email`` and return its uid.
        The password itself is checked by the identity provider on the client
        side; it is only required to be present here.
        """
        if not email or not password:
            raise InvalidCredentials()
        try:
            return await self.identity.get_uid_by_email(email)
        except AccountNotFound:
            raise InvalidCredentials()
        except Exception as e:
            raise StoreError("identity lookup failed") from e
