"""
Configuration for the merge API.
"""

from .settings import Settings
from .table_names import get_table_name

__all__ = ['Settings', 'get_table_name']
