# client_registry/adapters/inbound/api/v1/endpoints/client_endpoint.py

"""
Endpoints of the client registry.

List, fetch, register, partially update and delete client registrations.
Resources never include the client secret.
"""

import logging
from urllib.parse import quote
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from client_registry.adapters.configuration.config import settings
from client_registry.adapters.inbound.api.deps import get_client_service, require_api_access
from client_registry.application.use_cases.client_use_cases import AsyncClientService
from client_registry.application.dtos.client_dto import (
    ClientCreate,
    ClientResource,
    ClientSummaryResource,
    ClientUpdate,
    ErrorOutput,
    ResourceSet,
)
from client_registry.domain.models.client_domain_model import Client
from client_registry.shared.utils.pagination import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_access)])


def client_url(request: Request, client_id: str) -> str:
    """Canonical registry-relative URL of a client."""
    root_path = request.scope.get("root_path", "").rstrip("/")
    return f"{root_path}{settings.API_PREFIX}/clients/{quote(client_id, safe='')}"


def to_summary(request: Request, client: Client) -> ClientSummaryResource:
    return ClientSummaryResource(
        url=client_url(request, client.id),
        id=client.id,
        name=client.name,
        enabled=client.enabled,
    )


def to_resource(request: Request, client: Client) -> ClientResource:
    return ClientResource(
        url=client_url(request, client.id),
        id=client.id,
        name=client.name,
        allowed_cors_origins=client.allowed_cors_origins,
        redirect_uris=client.redirect_uris,
        post_logout_redirect_uris=client.post_logout_redirect_uris,
        allowed_scopes=client.allowed_scopes,
        access_token_type=client.access_token_type.display_name,
        enabled=client.enabled,
    )


@router.get(
    "",
    response_model=ResourceSet[ClientSummaryResource],
    summary="List Clients",
    description="Returns one offset page of clients and the total size of the registry.",
)
async def list_clients(
        request: Request,
        skip: int = Query(0, description="Number of clients to skip; negative values count as 0"),
        take: int = Query(
            DEFAULT_PAGE_SIZE, description="Page size, at most 100; negative values use the default"
        ),
        service: AsyncClientService = Depends(get_client_service),
):
    page = await service.list_clients(skip=skip, take=take)
    return ResourceSet[ClientSummaryResource](
        skip=page.skip,
        total_size=page.total_size,
        resources=[to_summary(request, client) for client in page.clients],
    )


@router.get(
    "/{client_id:path}",
    response_model=ClientResource,
    summary="Get Client",
    responses={404: {"model": ErrorOutput, "description": "Client not found"}},
)
@router.head(
    "/{client_id:path}",
    response_model=ClientResource,
    summary="Check Client",
    responses={404: {"model": ErrorOutput, "description": "Client not found"}},
)
async def get_client(
        request: Request,
        client_id: str = Path(..., description="Client identifier"),
        service: AsyncClientService = Depends(get_client_service),
):
    client = await service.get_client(client_id)
    return to_resource(request, client)


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Register Client",
    description="Registers a client. The canonical URL is returned in the Location header.",
    responses={
        400: {"model": ErrorOutput, "description": "Invalid input"},
        409: {"model": ErrorOutput, "description": "Client already exists"},
    },
)
async def create_client(
        request: Request,
        data: ClientCreate,
        service: AsyncClientService = Depends(get_client_service),
):
    client = await service.create_client(data)
    return Response(status_code=status.HTTP_200_OK, headers={"Location": client_url(request, client.id)})


@router.put(
    "/{client_id:path}",
    status_code=status.HTTP_200_OK,
    summary="Update Client",
    description="Partial update: omitted or null fields are left unchanged.",
    responses={
        400: {"model": ErrorOutput, "description": "Invalid input"},
        404: {"model": ErrorOutput, "description": "Client not found"},
    },
)
async def update_client(
        data: ClientUpdate,
        client_id: str = Path(..., description="Client identifier"),
        service: AsyncClientService = Depends(get_client_service),
):
    await service.update_client(client_id, data)
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{client_id:path}",
    status_code=status.HTTP_200_OK,
    summary="Delete Client",
    description="Deletes a client. Deleting an unknown client also succeeds.",
)
async def delete_client(
        client_id: str = Path(..., description="Client identifier"),
        service: AsyncClientService = Depends(get_client_service),
):
    await service.delete_client(client_id)
    return Response(status_code=status.HTTP_200_OK)
