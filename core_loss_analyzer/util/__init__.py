from .exit_codes import ExitCode
from .logging import configure_logging, get_logger

__all__ = ["ExitCode", "configure_logging", "get_logger"]
