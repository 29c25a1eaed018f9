"""
Character merge API: shared code for the Lambda handlers.
"""

__version__ = '1.0.0'
