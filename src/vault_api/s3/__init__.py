"""Thin wrappers over the S3 API calls the vault makes."""
