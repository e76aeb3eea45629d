"""Functions for deleting objects from an S3 bucket--the "D" in CRUD."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def delete_s3_object(bucket_name: str, object_key: str, s3_client: "S3Client") -> None:
    """
    Delete the current version of an object from an S3 bucket.

    On a versioned bucket this records a delete marker; earlier versions stay
    in the bucket. Deleting a key that does not exist is not an error.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key of the object to delete.
    :param s3_client: The boto3 S3 client to use.
    """
    s3_client.delete_object(Bucket=bucket_name, Key=object_key)
