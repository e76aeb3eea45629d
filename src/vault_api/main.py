from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from vault_api.errors import (
    VaultError,
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_vault_errors,
)
from vault_api.routers.files import router as files_router
from vault_api.routers.health import router as health_router
from vault_api.services import FileService, build_file_service
from vault_api.settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None,
               file_service: Optional[FileService] = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="File Vault API",
        summary="Store files and recover earlier versions of them",
        version="v1",
        description=dedent(
            """\
        Every upload becomes a new version of the file. Restoring a version
        copies it into a new current version, so history is never lost.

        | Route | Notes |
        | --- | --- |
        | `POST /api/files/upload` | multipart field `file` |
        | `GET /api/files/versions/{name}` | labels V1 (oldest) .. Vn |
        | `POST /api/files/restore/{name}/{versionId}` | additive restore |
        """
        ),
        docs_url="/",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.file_service = file_service or build_file_service(settings)
    logger.info(
        f"Serving bucket {settings.s3_bucket_name} with metadata table {settings.dynamodb_table}"
    )

    app.include_router(files_router, prefix="/api/files", tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(VaultError, handle_vault_errors)
    app.add_exception_handler(RequestValidationError, handle_pydantic_validation_errors)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
