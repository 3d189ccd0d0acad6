"""Publishing of rendered PDFs to S3."""

import asyncio
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import aioboto3

from print2pdf.core.errors import StorageWriteError
from print2pdf.core.renderer import PdfArtifact

logger = logging.getLogger(__name__)

# Anything outside S3's "safe characters" set is replaced in object keys
UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9!\-_.*'()]")


@dataclass(frozen=True)
class StorageLocation:
    """Where a published PDF lives."""

    key: str
    url: str


class ArtifactPublisher:
    """Service for uploading PDFs to a public-read S3 bucket."""

    def __init__(
        self,
        bucket: str,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_region: str = "us-east-1",
        timeout_seconds: int = 10,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        key_prefix: str = "",
    ):
        """Initialize publisher with the target bucket and AWS credentials."""
        self.bucket = bucket
        self.aws_region = aws_region
        self.timeout_seconds = timeout_seconds
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.key_prefix = key_prefix
        self.session = aioboto3.Session(
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=aws_region,
        )

    async def publish(self, artifact: PdfArtifact, file_name: str) -> StorageLocation:
        """
        Upload a PDF under a unique key and return its public URL.

        Args:
            artifact: Rendered PDF
            file_name: File name requested by the caller

        Returns:
            StorageLocation of the uploaded object

        Raises:
            StorageWriteError: If the upload fails
        """
        if not self.bucket:
            raise StorageWriteError("No storage bucket configured")

        key = self.build_key(file_name)
        logger.info(
            f"Uploading PDF to S3: bucket={self.bucket}, key={key}, "
            f"size={artifact.size_bytes} bytes"
        )

        client_config = {"region_name": self.aws_region}
        if self.endpoint_url:
            client_config["endpoint_url"] = self.endpoint_url

        try:
            async with self.session.client("s3", **client_config) as s3_client:
                await asyncio.wait_for(
                    s3_client.put_object(
                        Bucket=self.bucket,
                        Key=key,
                        Body=artifact.data,
                        ContentType=artifact.content_type,
                        ContentDisposition=f"inline; filename*=UTF-8''{quote(file_name)}",
                    ),
                    timeout=self.timeout_seconds,
                )
        except asyncio.TimeoutError as e:
            raise StorageWriteError(
                f"Timeout uploading PDF after {self.timeout_seconds}s"
            ) from e
        except Exception as e:
            logger.error(f"Error uploading PDF to S3: {e}")
            raise StorageWriteError(f"Failed to upload PDF: {str(e)}") from e

        return StorageLocation(key=key, url=self.public_url(key))

    def build_key(self, file_name: str) -> str:
        """
        Build a collision-free object key for ``file_name``.

        A fresh UUID directory keeps the caller's file name as the last path
        segment while guaranteeing uniqueness.
        """
        safe_name = UNSAFE_KEY_CHARS.sub("_", file_name)
        return f"{self.key_prefix}{uuid.uuid4().hex}/{safe_name}"

    def public_url(self, key: str) -> str:
        """Build the anonymous-read URL of an object key."""
        quoted_key = quote(key)
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{quoted_key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{quoted_key}"
        return f"https://{self.bucket}.s3.{self.aws_region}.amazonaws.com/{quoted_key}"
