# =============================================================================
# mural_publisher/cli/__init__.py — CLI Module Overview
# =============================================================================
#
# The CLI is the only interface of the mural publisher.  murals.py holds
# every subcommand (argparse, not Click/Typer) and builds its own providers
# through the factories in mural_publisher/main.py, because each command
# runs as a one-shot process.
# =============================================================================

"""CLI tools for the mural publisher.

- ``mural-publisher`` / ``python -m mural_publisher.cli`` — publish mural
  submissions and manage remote content.
"""
