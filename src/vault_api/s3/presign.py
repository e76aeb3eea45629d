"""Time-limited download URLs for S3 objects."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def generate_download_url(
    bucket_name: str,
    object_key: str,
    download_name: str,
    expires_in: int,
    s3_client: "S3Client",
    version_id: Optional[str] = None,
) -> str:
    """
    Presign a GET for one object (optionally one version of it).

    The URL forces an attachment disposition so browsers save the download
    under ``download_name`` rather than the full key.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key of the object.
    :param download_name: File name offered to the browser.
    :param expires_in: Lifetime of the URL in seconds.
    :param s3_client: The boto3 S3 client to use.
    :param version_id: Optional version; the current version when omitted.
    :return: The presigned URL.
    """
    params = {
        "Bucket": bucket_name,
        "Key": object_key,
        "ResponseContentDisposition": f'attachment; filename="{download_name}"',
    }
    if version_id:
        params["VersionId"] = version_id
    return s3_client.generate_presigned_url(
        ClientMethod="get_object",
        Params=params,
        ExpiresIn=expires_in,
    )
