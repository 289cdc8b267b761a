# Common utilities
from passe.common.logging_utils import setup_logger as setup_logger
from passe.common.password import generate as generate

__all__ = ["generate", "setup_logger"]
