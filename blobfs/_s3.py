from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import urlparse

from ._exceptions import BlobNotFoundError
from ._typing import BlobInfo, ListResult

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def env_default(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split an ``s3://bucket/prefix`` URI into bucket and key prefix.

    The key prefix may be empty.
    """

    if not uri:
        raise ValueError("uri is required")
    parsed = urlparse(uri)
    if parsed.scheme != "s3":
        raise ValueError(f"Invalid S3 URI: {uri}")
    if not parsed.netloc:
        raise ValueError(f"S3 URI missing bucket: {uri}")
    return parsed.netloc, parsed.path.strip("/")


def _is_not_found(exc: Exception) -> bool:
    response = getattr(exc, "response", None) or {}
    error = response.get("Error") or {}
    code = str(error.get("Code") or "")
    return code in _NOT_FOUND_CODES


class Boto3S3Store:
    """S3/MinIO blob store using boto3.

    All keys are scoped under *key_prefix* inside *bucket*, so several
    filesystems can share one bucket. Errors other than "not found" are
    propagated unchanged; retries are left to botocore's own configuration.
    """

    def __init__(
        self,
        bucket: str,
        *,
        key_prefix: str = "",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        region: str = "us-east-1",
        use_ssl: bool | None = None,
        url_style: str = "path",
        session_token: str | None = None,
        client_kwargs: dict[str, Any] | None = None,
        client: Any | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("bucket is required")
        self.bucket = bucket
        key_prefix = key_prefix.strip("/")
        self.key_prefix = key_prefix + "/" if key_prefix else ""

        if client is not None:
            self._client = client
            return

        try:
            import boto3
            from botocore.config import Config
        except Exception as exc:  # noqa: BLE001
            raise RuntimeError("boto3 is required for Boto3S3Store") from exc

        if use_ssl is None:
            use_ssl = bool(endpoint_url and endpoint_url.startswith("https://"))

        config = Config(s3={"addressing_style": url_style})
        kwargs: dict[str, Any] = dict(client_kwargs or {})
        kwargs.update(
            dict(
                service_name="s3",
                endpoint_url=endpoint_url,
                region_name=region,
                use_ssl=use_ssl,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                aws_session_token=session_token,
                config=config,
            )
        )
        self._client = boto3.client(**kwargs)

    @classmethod
    def from_uri(cls, uri: str, **kwargs: Any) -> Boto3S3Store:
        bucket, key_prefix = parse_s3_uri(uri)
        return cls(bucket, key_prefix=key_prefix, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> Boto3S3Store:
        """Build a store from ``BLOBFS_S3_URI`` and the usual AWS variables.

        Explicit keyword arguments win over the environment.
        """
        uri = env_default("BLOBFS_S3_URI")
        if uri is None:
            raise ValueError("BLOBFS_S3_URI is not set")
        settings: dict[str, Any] = {
            "endpoint_url": env_default("BLOBFS_S3_ENDPOINT_URL"),
            "access_key": env_default("AWS_ACCESS_KEY_ID"),
            "secret_key": env_default("AWS_SECRET_ACCESS_KEY"),
            "session_token": env_default("AWS_SESSION_TOKEN"),
            "region": env_default("AWS_REGION", "us-east-1"),
        }
        settings.update(kwargs)
        return cls.from_uri(uri, **settings)

    def _full_key(self, key: str) -> str:
        return self.key_prefix + key

    def _strip(self, full_key: str) -> str:
        return full_key[len(self.key_prefix):]

    def put(self, key: str, data: bytes) -> None:
        self._client.put_object(Bucket=self.bucket, Key=self._full_key(key), Body=data)

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=self._full_key(key))
        except Exception as exc:  # noqa: BLE001
            if _is_not_found(exc):
                raise BlobNotFoundError(key) from exc
            raise
        return response["Body"].read()

    def head(self, key: str) -> BlobInfo:
        try:
            response = self._client.head_object(Bucket=self.bucket, Key=self._full_key(key))
        except Exception as exc:  # noqa: BLE001
            if _is_not_found(exc):
                raise BlobNotFoundError(key) from exc
            raise
        modified = response.get("LastModified")
        return BlobInfo(
            key=key,
            size=int(response.get("ContentLength") or 0),
            modified_at=modified.timestamp() if modified is not None else 0.0,
        )

    def delete(self, key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=self._full_key(key))

    def list(
        self, prefix: str, delimiter: str = "", limit: int | None = None
    ) -> ListResult:
        params: dict[str, Any] = {"Bucket": self.bucket, "Prefix": self._full_key(prefix)}
        if delimiter:
            params["Delimiter"] = delimiter
        if limit is not None:
            params["PaginationConfig"] = {"PageSize": min(limit, 1000)}

        result = ListResult()
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(**params):
            for obj in page.get("Contents", []) or []:
                full_key = obj.get("Key")
                if not full_key:
                    continue
                modified = obj.get("LastModified")
                result.objects.append(
                    BlobInfo(
                        key=self._strip(full_key),
                        size=int(obj.get("Size") or 0),
                        modified_at=modified.timestamp() if modified is not None else 0.0,
                    )
                )
            for common in page.get("CommonPrefixes", []) or []:
                value = common.get("Prefix")
                if value:
                    result.prefixes.append(self._strip(value))
            if limit is not None and len(result.objects) + len(result.prefixes) >= limit:
                break
        if limit is not None:
            del result.objects[limit:]
            del result.prefixes[max(0, limit - len(result.objects)):]
        logger.debug(
            "list_objects_v2 bucket=%s prefix=%s objects=%d prefixes=%d",
            self.bucket,
            params["Prefix"],
            len(result.objects),
            len(result.prefixes),
        )
        return result
