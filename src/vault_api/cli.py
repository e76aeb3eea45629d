# cli.py
import logging

import click

from vault_api.aws.utils import AWSClientManager
from vault_api.services import build_file_service
from vault_api.settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the file vault API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  Deployment Mode: {settings.deployment_mode}")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  DynamoDB Table: {settings.dynamodb_table}")
    click.echo(f"  Download URL Expiry: {settings.download_url_expiry_seconds}s")
    click.echo(f"  Max Upload Size: {settings.max_upload_bytes} bytes")
    click.echo(f"  Owner Header: {settings.owner_header}")


@cli.command()
def init_stores():
    """Create the versioned bucket and the metadata table if missing"""
    settings = get_settings()
    service = build_file_service(settings, AWSClientManager(settings))

    created = service.object_store.ensure_bucket(settings.aws_region)
    state = "created" if created else "already present"
    click.echo(f"Bucket {settings.s3_bucket_name}: {state}, versioning enabled")

    created = service.metadata_index.ensure_table()
    state = "created" if created else "already present"
    click.echo(f"Table {settings.dynamodb_table}: {state}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
def serve(host, port):
    """Run the API with uvicorn"""
    import uvicorn
    from vault_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


if __name__ == "__main__":
    cli()
