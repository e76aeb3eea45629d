"""Per-user versioned file storage on S3 with a DynamoDB metadata index."""
