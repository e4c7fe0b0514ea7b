"""Fetcher package for pluggable byte-stream sources."""

from .az_blob_fetcher import AzureBlobFetcher
from .file_system_fetcher import FileSystemFetcher
from .http_fetcher import HttpFetcher
from .interfaces import FetchContext, FetcherPort
from .registry import FetcherRegistry
from .s3_fetcher import S3Fetcher

__all__ = [
	"AzureBlobFetcher",
	"FetchContext",
	"FetcherPort",
	"FetcherRegistry",
	"FileSystemFetcher",
	"HttpFetcher",
	"S3Fetcher",
]
