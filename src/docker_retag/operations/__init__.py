"""
Operations package - error mapping and output between the CLI and the registry client.

Keeps the CLI command thin: exceptions are mapped to exit codes in one place
and all human-readable output goes through the printers.
"""
from .mappers import exit_code_for, run_and_exit
from .printers import print_error, print_registry, print_retag_summary

__all__ = ["exit_code_for", "run_and_exit", "print_error", "print_registry", "print_retag_summary"]
