# client_registry/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from client_registry.adapters.inbound.api.v1.endpoints import client_endpoint

api_router = APIRouter()

api_router.include_router(client_endpoint.router, prefix="/clients", tags=["Clients"])
