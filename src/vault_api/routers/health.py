from fastapi import APIRouter, Request

from vault_api.settings import Settings

router = APIRouter()


@router.get("/health")
def health_check(request: Request):
    """
    Health check endpoint for monitoring API status.

    Reports the deployment mode and which bucket and table the API is wired to.
    Store reachability is not probed; the stores are checked on first use.
    """
    settings: Settings = request.app.state.settings
    return {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "components": {
            "api": "ready",
            "object_store": settings.s3_bucket_name,
            "metadata_index": settings.dynamodb_table,
        },
        "ready": True,
    }
