"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import CopyObjectOutputTypeDef, PutObjectOutputTypeDef

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: bytes,
    s3_client: "S3Client",
    content_type: Optional[str] = None,
    server_side_encryption: Optional[str] = None,
) -> "PutObjectOutputTypeDef":
    """
    Upload a file to an S3 bucket as a new version of ``object_key``.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param s3_client: The boto3 S3 client to use.
    :param content_type: The MIME type of the file, e.g. "text/plain" for a text file.
    :param server_side_encryption: SSE algorithm, e.g. "AES256"; omitted when ``None``.
    :return: The ``put_object`` response, carrying ``VersionId`` on a versioned bucket.
    """
    params = {
        "Bucket": bucket_name,
        "Key": object_key,
        "Body": file_content,
        "ContentType": content_type or DEFAULT_CONTENT_TYPE,
    }
    if server_side_encryption:
        params["ServerSideEncryption"] = server_side_encryption
    return s3_client.put_object(**params)


def copy_s3_object_version(
    bucket_name: str,
    object_key: str,
    source_version_id: str,
    s3_client: "S3Client",
    server_side_encryption: Optional[str] = None,
) -> "CopyObjectOutputTypeDef":
    """
    Copy one version of an object onto the same key, creating a new current version.

    The source version is left untouched.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param source_version_id: The version whose bytes become the new current version.
    :param s3_client: The boto3 S3 client to use.
    :param server_side_encryption: SSE algorithm, e.g. "AES256"; omitted when ``None``.
    :return: The ``copy_object`` response, carrying the new ``VersionId``.
    """
    params = {
        "Bucket": bucket_name,
        "Key": object_key,
        "CopySource": {"Bucket": bucket_name, "Key": object_key, "VersionId": source_version_id},
    }
    if server_side_encryption:
        params["ServerSideEncryption"] = server_side_encryption
    return s3_client.copy_object(**params)
