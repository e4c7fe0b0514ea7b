"""Adapter layer package for object store and job backend boundaries."""

from .aws_clients import adapter_client_error_code, adapter_create_aws_client
from .aws_transcribe_backend import AwsTranscribeJobBackend
from .interfaces import JobBackendPort, ObjectStorePort
from .s3_object_store import S3ObjectStore

__all__ = [
	"AwsTranscribeJobBackend",
	"JobBackendPort",
	"ObjectStorePort",
	"S3ObjectStore",
	"adapter_client_error_code",
	"adapter_create_aws_client",
]
