"""Documented exit codes for the core-loss CLI.

Exit codes follow UNIX conventions:
- 0: Success
- 1: General/unspecified error
- 2: Invalid input (arguments, waveform file, coefficients)
- 3: Minor-loop label counter overflow
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants for the core-loss CLI."""

    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_INPUT: int = 2
    LOOP_OVERFLOW: int = 3

    @classmethod
    def message(cls, code: int) -> str:
        """Return a human-readable message for an exit code."""
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_INPUT: "Invalid input",
            cls.LOOP_OVERFLOW: "Too many minor loops",
        }
        return messages.get(code, f"Unknown exit code {code}")
