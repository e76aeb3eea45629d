"""Bucket provisioning: the vault requires S3 versioning to be enabled."""
import logging
from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def ensure_versioned_bucket(bucket_name: str, region: str, s3_client: "S3Client") -> bool:
    """
    Create ``bucket_name`` if needed and turn on versioning.

    :param bucket_name: The name of the S3 bucket.
    :param region: Region the bucket is created in.
    :param s3_client: The boto3 S3 client to use.
    :return: True if the bucket was created, False if it already existed.
    """
    created = False
    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") not in ("404", "NoSuchBucket"):
            raise
        params = {"Bucket": bucket_name}
        # us-east-1 rejects an explicit location constraint
        if region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        s3_client.create_bucket(**params)
        logger.info(f"Created bucket {bucket_name} in {region}")
        created = True

    s3_client.put_bucket_versioning(
        Bucket=bucket_name,
        VersioningConfiguration={"Status": "Enabled"},
    )
    logger.info(f"Versioning enabled on {bucket_name}")
    return created
