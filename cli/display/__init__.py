"""
CLI display modules.
"""

from cli.display.tables import display_failures, display_syx_info
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_failures",
    "display_syx_info",
    "display_hex_dump",
]
