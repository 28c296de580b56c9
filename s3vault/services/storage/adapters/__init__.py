"""Object store adapters."""

from .s3 import S3Adapter

__all__ = ["S3Adapter"]
