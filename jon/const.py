"""
Application constants and metadata.
"""

# Application info
APP_NAME = "jon"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "JSON-superset configuration format with schema validation"

# Signed 64-bit integer range
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Default values
DEFAULT_MAX_DEPTH = 256
DEFAULT_INDENT = 2
DEFAULT_FILENAME = "<string>"
