"""Buildsize CLI — Typer-based command-line interface.

Provides the ``buildsize`` command with subcommands for recording a build
snapshot, publishing a size report, and diffing two local snapshots.

All output uses Rich for formatted terminal display.
"""
