"""
MinIO storage backend implementation

MinIO speaks the S3 API, so this backend reuses the S3 backend operations
with an explicit endpoint, path-style addressing and s3v4 signatures.
"""

from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from .s3 import DEFAULT_REGION, S3StorageBackend


class MinIOStorageBackend(S3StorageBackend):
    """
    Storage backend for self-hosted MinIO (or any S3-compatible server).

    Args:
        endpoint: MinIO server URL (e.g., "http://localhost:9000")
        keyId: Access key
        keySecret: Secret key
        bucket: Bucket name, created on construction if missing
        region: Region reported to the server (default: "us-east-1")

    Raises:
        StorageBackendError: If client initialization or bucket check fails
    """

    backendName = "MinIO"

    def __init__(
        self,
        endpoint: str,
        keyId: str,
        keySecret: str,
        bucket: str,
        region: str = DEFAULT_REGION,
    ):
        super().__init__(bucket=bucket, region=region, keyId=keyId, keySecret=keySecret, endpoint=endpoint)

    def _createClient(self, keyId: Optional[str], keySecret: Optional[str]) -> Any:
        # MinIO buckets are not DNS names, so virtual-hosted addressing won't resolve
        return boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=keyId,
            aws_secret_access_key=keySecret,
            config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

    def _createBucketParams(self) -> Dict[str, Any]:
        return {"Bucket": self.bucket}
