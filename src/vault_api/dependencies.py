"""FastAPI dependencies shared by the routers."""
from fastapi import Request

from vault_api.errors import AuthenticationRequired
from vault_api.services import FileService
from vault_api.settings import Settings


def get_owner_id(request: Request) -> str:
    """User id forwarded by the authenticating gateway in front of the API."""
    settings: Settings = request.app.state.settings
    owner_id = request.headers.get(settings.owner_header)
    if not owner_id:
        raise AuthenticationRequired("Invalid or missing authentication token")
    return owner_id


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service
