"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one transcription command on the calling thread.
"""

import argparse
import json
import logging

import uvicorn

from fetchscribe.bootstrap import bootstrap_create_application, bootstrap_create_transcription_orchestrator
from fetchscribe.config import config_load_settings
from fetchscribe.domain import TranscriptionOutcome, TranscriptionResult


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when transcription is unavailable or failed.
    """

    argument_parser = argparse.ArgumentParser(description="fetchscribe runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "transcribe-run", "transcribe-result"),
        help="Runtime command: `api` starts server, `transcribe-run` submits a file and waits, "
        "`transcribe-result` waits for an existing job",
        type=str,
    )
    argument_parser.add_argument(
        "target",
        nargs="?",
        type=str,
        help="Media file path for `transcribe-run`, job name for `transcribe-result`",
    )
    argument_parser.add_argument(
        "--language",
        dest="language_hint",
        type=str,
        help="Optional source language code for `transcribe-run`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if parsed_arguments.command in ("transcribe-run", "transcribe-result"):
        if not parsed_arguments.target:
            argument_parser.error(f"`{parsed_arguments.command}` requires a target argument")
        orchestrator = bootstrap_create_transcription_orchestrator(settings)
        if parsed_arguments.command == "transcribe-run":
            result = orchestrator.transcription_run(
                source_path=parsed_arguments.target,
                language_hint=parsed_arguments.language_hint,
            )
        else:
            result = orchestrator.transcription_get_result(job_name=parsed_arguments.target)
        main_print_transcription_result(result)
        if result.outcome is not TranscriptionOutcome.COMPLETED:
            raise SystemExit(1)
        return

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_transcription_result(result: TranscriptionResult) -> None:
    """Print one transcription result as JSON.

    Args:
        result: Transcription result contract.

    Returns:
        None: Prints result to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    print(
        json.dumps(
            {
                "outcome": result.outcome.value,
                "job_name": result.job_name,
                "transcript": result.transcript,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
