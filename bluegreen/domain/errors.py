"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for every failure the rotation can report
- Lets the presentation layer map failures to exit codes without string matching
- Core code raises these and never terminates the process itself

Taxonomy:
- ConfigurationError: bad input detected before any remote call
- ProbeError: slot existence could not be determined; nothing mutated yet
- PlatformError: a Platform Facade operation failed
- SequencerError: misuse of the action sequencer
"""

from typing import Optional


class BlueGreenError(Exception):
    """Base class for all bluegreen errors."""


class ConfigurationError(BlueGreenError, ValueError):
    pass


class ProbeError(BlueGreenError):
    pass


class PlatformError(BlueGreenError):
    pass


class PlatformCommandError(PlatformError):
    """A platform CLI invocation exited non-zero or could not be run at all."""

    def __init__(
        self, command: str, exit_code: Optional[int], output: str = ""
    ) -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        message = f"'{command}' failed"
        if exit_code is not None:
            message = f"{message} with exit code {exit_code}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)


class SequencerError(BlueGreenError):
    pass


NO_MANIFEST_MESSAGE = "a manifest is required to push this application"
