# school_portal/core/deps.py
from fastapi import Depends, Request

from school_portal.core.identity import IdentityProvider
from school_portal.db.store import DocumentStore
from school_portal.services.auth_service import AuthService
from school_portal.services.member_service import MemberService
from school_portal.services.opportunity_service import OpportunityService
from school_portal.services.school_service import SchoolService
from school_portal.services.user_locator import ScanningUserLocator, UserLocator


def get_store(request: Request) -> DocumentStore:
    """Store created in the app lifespan; tests override this dependency."""
    return request.app.state.store


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_user_locator(store: DocumentStore = Depends(get_store)) -> UserLocator:
    return ScanningUserLocator(store)


def get_school_service(
    store: DocumentStore = Depends(get_store), locator: UserLocator = Depends(get_user_locator)
) -> SchoolService:
    return SchoolService(store, locator)


def get_member_service(
    store: DocumentStore = Depends(get_store), locator: UserLocator = Depends(get_user_locator)
) -> MemberService:
    return MemberService(store, locator)


def get_opportunity_service(
    store: DocumentStore = Depends(get_store), locator: UserLocator = Depends(get_user_locator)
) -> OpportunityService:
    return OpportunityService(store, locator)


def get_auth_service(identity: IdentityProvider = Depends(get_identity_provider)) -> AuthService:
    return AuthService(identity)
