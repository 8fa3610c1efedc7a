#!/usr/bin/env python3
"""
Error handling utilities for the flu toolkit.
Provides formatting and decorators used by the command line entry points.
"""
import sys
import traceback
import logging
from functools import wraps
from typing import Callable, TypeVar, Any, Dict, Optional, Union

from .exceptions import (
    FluError, ConfigurationError, FileOperationError, ValidationError, AlignmentError
)

T = TypeVar('T')

# Most specific class first
EXIT_CODES = (
    (ConfigurationError, 3),
    (FileOperationError, 4),
    (ValidationError, 5),
    (AlignmentError, 6),
    (FluError, 1),
)
UNEXPECTED_EXIT_CODE = 2
INTERRUPT_EXIT_CODE = 130


def exit_code_for(error: Exception) -> int:
    """Map an exception to the process exit code of the CLI"""
    for error_class, code in EXIT_CODES:
        if isinstance(error, error_class):
            return code
    return UNEXPECTED_EXIT_CODE


def format_error(error: Exception, verbose: bool = False) -> str:
    """Format an error message for display

    Args:
        error: Exception object
        verbose: Whether to include the details dictionary or traceback

    Returns:
        Formatted error message
    """
    if isinstance(error, FluError):
        msg = f"{error.__class__.__name__}: {error.message}"
        if verbose and error.details:
            lines = [f"  {key}: {value}" for key, value in sorted(error.details.items())]
            msg += "\n" + "\n".join(lines)
        return msg
    if verbose:
        return f"Unexpected Error ({error.__class__.__name__}): {error}\n{traceback.format_exc()}"
    return f"Unexpected Error: {error}"


def log_exception(logger: logging.Logger,
                  error: Exception,
                  level: int = logging.ERROR,
                  context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context

    Known errors are logged without a traceback, unexpected ones with it.
    """
    if isinstance(error, FluError):
        ctx = {**error.details, **(context or {})}
        logger.log(level, f"{error.__class__.__name__}: {error.message}",
                   extra={"context": ctx} if ctx else None)
    else:
        logger.log(level, f"Unexpected error: {error}",
                   extra={"context": context} if context else None,
                   exc_info=True)


def handle_exceptions(exit_on_error: bool = False,
                      verbose: bool = False) -> Callable[[Callable[..., T]], Callable[..., Union[T, int]]]:
    """Decorator turning exceptions into exit codes

    Args:
        exit_on_error: Call sys.exit with the code instead of returning it
        verbose: Print error details to stderr

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Union[T, int]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Union[T, int]:
            logger = logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                logger.info("Operation cancelled by user")
                print("\nOperation cancelled by user", file=sys.stderr)
                code = INTERRUPT_EXIT_CODE
            except Exception as e:
                log_exception(logger, e)
                print(format_error(e, verbose=verbose), file=sys.stderr)
                if not isinstance(e, FluError):
                    print("See log for details. Run with --verbose for more information.", file=sys.stderr)
                code = exit_code_for(e)
            if exit_on_error:
                sys.exit(code)
            return code
        return wrapper
    return decorator


def cli_error_handler(func: Callable[..., T]) -> Callable[..., T]:
    """Specialized decorator for CLI commands"""
    return handle_exceptions(exit_on_error=True)(func)
