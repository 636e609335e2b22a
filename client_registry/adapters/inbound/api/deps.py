# client_registry/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via FastAPI
Depends() for database access and API authorization.
"""

import logging
from typing import Optional
from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from client_registry.adapters.configuration.config import settings
from client_registry.adapters.outbound.persistence.database import get_db
from client_registry.adapters.outbound.security.api_token_manager import ApiTokenManager
from client_registry.application.use_cases.client_use_cases import AsyncClientService
from client_registry.domain.exceptions import InvalidCredentialsException

# Configure logger
logger = logging.getLogger(__name__)

# Bearer scheme; missing headers are reported by require_api_access itself
bearer_scheme = HTTPBearer(auto_error=False)

########################################################################
# Database Session Management
########################################################################

get_db_session = get_db


async def get_client_service(db: AsyncSession = Depends(get_db_session)) -> AsyncClientService:
    return AsyncClientService(db)


########################################################################
# API Token Authorization
########################################################################

async def require_api_access(
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[dict]:
    """
    Verify the bearer token of a registry API call.

    Returns:
        The token payload, or None when API_AUTH_ENABLED is off

    Raises:
        InvalidCredentialsException: If the token is missing, invalid or expired
        PermissionDeniedException: If the token lacks the registry scope
    """
    if not settings.API_AUTH_ENABLED:
        return None

    if credentials is None:
        logger.warning("Registry API call without bearer token")
        raise InvalidCredentialsException(detail="Missing bearer token.")

    payload = ApiTokenManager.verify_api_token(credentials.credentials)
    logger.debug(f"Registry API call authorized for subject: {payload.get('sub')}")
    return payload
