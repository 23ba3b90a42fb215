"""enginescout CLI — Typer-based command-line interface.

Provides the ``enginescout`` command with subcommands for resolving the
latest fully published commit, verifying one commit, and listing asset URLs.

Diagnostics and reports go to stderr through Rich; stdout carries only the
machine-readable result.
"""
