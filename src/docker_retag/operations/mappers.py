"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and the CLI command wrapper
so that every failure is reported as a single line and a non-zero exit.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

import typer

from .printers import print_error

T = TypeVar('T')

logger = logging.getLogger(__name__)

# Looked up along the exception's MRO, most derived class first
EXIT_CODES = {
    "InvalidReference": 2,
    "ValueError": 2,
    "HttpError": 3,
    "TokenDecodeError": 4,
    "RequestError": 5,
}

FALLBACK_EXIT_CODE = 1


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to exit code.

    - 2: Invalid arguments or configuration (InvalidReference, ValueError)
    - 3: Unexpected HTTP status (HttpError)
    - 4: Invalid token endpoint response (TokenDecodeError)
    - 5: Network error (any httpx.RequestError)
    - 1: Anything else

    Args:
        exc: Exception to map

    Returns:
        Exit code
    """
    for cls in type(exc).__mro__:
        if cls.__name__ in EXIT_CODES:
            return EXIT_CODES[cls.__name__]
    return FALLBACK_EXIT_CODE


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function; any exception is printed as one line on
    stderr and turned into ``typer.Exit`` with the mapped code.

    Args:
        func: Function to execute

    Returns:
        Function result if successful

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
