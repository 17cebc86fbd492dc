"""Request-scoped dependencies: settings, services and the current user."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from vidtube.composer import PageRequest
from vidtube.config import Settings
from vidtube.database import get_db
from vidtube.exceptions import UnauthorizedError
from vidtube.models.user import User
from vidtube.services.asset_service import AssetService
from vidtube.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return AuthService(request.app.state.settings)


def get_asset_service(request: Request) -> AssetService:
    settings = request.app.state.settings
    return AssetService(request.app.state.asset_host, settings.upload_tmp_dir)


def get_page(
    request: Request,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> PageRequest:
    """Page and limit query parameters, validated and capped."""
    settings = request.app.state.settings
    return PageRequest.from_query(
        page,
        limit,
        max_limit=settings.max_page_size,
        default_limit=settings.default_page_size,
    )


def _extract_token(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get("accessToken")


def get_optional_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User | None:
    """
    The authenticated user, or None for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    token = _extract_token(request, credentials)
    if not token:
        return None

    user_id = auth.decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Invalid access token")
    return user


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """The authenticated user; 401 when missing."""
    if user is None:
        raise UnauthorizedError("Unauthorized request")
    return user


DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
Assets = Annotated[AssetService, Depends(get_asset_service)]
Pagination = Annotated[PageRequest, Depends(get_page)]
