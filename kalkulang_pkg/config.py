"""Centralized configuration for Kalkulang.

This module defines:
- Input validation limits (length, parenthesis nesting)
- Cache size for parsed commands
- Output and logging defaults for the command-line front end

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KALKULANG_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulang")
except importlib.metadata.PackageNotFoundError:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("KALKULANG_MAX_INPUT_LENGTH", "512"))  # characters
MAX_NESTING_DEPTH = int(
    os.getenv("KALKULANG_MAX_NESTING_DEPTH", "64")
)  # parenthesis depth

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("KALKULANG_CACHE_SIZE_PARSE", "1024"))

# Output configuration
OUTPUT_PRECISION = int(
    os.getenv("KALKULANG_OUTPUT_PRECISION", "6")
)  # significant digits
PROMPT = os.getenv("KALKULANG_PROMPT", ">>> ")

# Logging
LOG_LEVEL = os.getenv("KALKULANG_LOG_LEVEL", "WARNING")

# Prefix of auto-generated binding names ($0, $1, ...)
ANONYMOUS_PREFIX = "$"
