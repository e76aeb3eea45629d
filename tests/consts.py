TEST_BUCKET_NAME = "test-vault-bucket"
TEST_TABLE_NAME = "test-file-metadata"
TEST_REGION = "us-east-1"
TEST_OWNER_ID = "user-123"
OTHER_OWNER_ID = "user-456"
OWNER_HEADER = "X-Authenticated-User"
