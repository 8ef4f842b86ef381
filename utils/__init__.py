"""
Utility modules for the workbench.
"""

from .formatting import format_currency, format_miles, format_number, format_percent, format_rent
from .config import Config

__all__ = [
    "format_currency",
    "format_miles",
    "format_number",
    "format_percent",
    "format_rent",
    "Config",
]
