import pytest
from fastapi.testclient import TestClient

from tests.fixtures.aws_fixtures import (  # noqa: F401
    aws_credentials,
    dynamodb_table,
    file_service,
    metadata_index,
    mocked_aws,
    object_store,
    s3_client,
    settings,
)
from vault_api.main import create_app


@pytest.fixture
def client(settings, mocked_aws) -> TestClient:
    with TestClient(create_app(settings)) as client:
        yield client
