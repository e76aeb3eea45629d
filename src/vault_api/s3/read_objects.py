"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def fetch_s3_objects_metadata(
    bucket_name: str,
    prefix: str,
    s3_client: "S3Client",
) -> List[Dict[str, Any]]:
    """
    Fetch the current-version metadata of every object under a prefix.

    Follows continuation tokens until the listing is exhausted.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Only keys beginning with this prefix are returned.
    :param s3_client: The boto3 S3 client to use.
    :return: The raw ``Contents`` entries (``Key``, ``Size``, ``LastModified``, ...).
    """
    paginator = s3_client.get_paginator("list_objects_v2")
    objects: List[Dict[str, Any]] = []
    for page in paginator.paginate(Bucket=bucket_name, Prefix=prefix):
        objects.extend(page.get("Contents", []))
    return objects


def fetch_s3_object_versions(
    bucket_name: str,
    object_key: str,
    s3_client: "S3Client",
) -> List[Dict[str, Any]]:
    """
    Fetch every content version of exactly one key.

    Delete markers are not content versions and are left out, as are keys
    that merely share ``object_key`` as a prefix.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key whose versions to list.
    :param s3_client: The boto3 S3 client to use.
    :return: The raw ``Versions`` entries in the order S3 reports them (newest first).
    """
    paginator = s3_client.get_paginator("list_object_versions")
    versions: List[Dict[str, Any]] = []
    for page in paginator.paginate(Bucket=bucket_name, Prefix=object_key):
        versions.extend(v for v in page.get("Versions", []) if v["Key"] == object_key)
    return versions


def head_s3_object(
    bucket_name: str,
    object_key: str,
    s3_client: "S3Client",
    version_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Fetch the metadata of an object, or of one of its versions.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key of the object.
    :param s3_client: The boto3 S3 client to use.
    :param version_id: Optional version; the current version when omitted.
    :return: The ``head_object`` response. Raises ``ClientError`` if absent.
    """
    params = {"Bucket": bucket_name, "Key": object_key}
    if version_id:
        params["VersionId"] = version_id
    return s3_client.head_object(**params)
