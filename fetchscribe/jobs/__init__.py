"""Job layer package for transcription orchestration boundaries."""

from .interfaces import TranscriberPort
from .poll_strategy import PollRetryStrategy
from .transcription_orchestrator import TranscriptionJobOrchestrator

__all__ = [
	"PollRetryStrategy",
	"TranscriberPort",
	"TranscriptionJobOrchestrator",
]
