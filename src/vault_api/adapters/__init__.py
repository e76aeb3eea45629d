"""
Adapter layer for the vault.

Contains the object store client (S3, authoritative) and the metadata index
adapter (DynamoDB, best-effort cache).
"""
