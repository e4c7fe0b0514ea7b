"""fetchscribe: pluggable fetch sources and staged remote transcription jobs."""
