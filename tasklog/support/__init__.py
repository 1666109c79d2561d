"""
Support layer for shared tasklog utilities.

Provides data directory resolution, YAML configuration and the interactive
note editor used by the CLI commands.
"""
