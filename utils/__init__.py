"""
Utils package - Utility functions and helpers
"""

from .helpers import CustomJSONEncoder, format_currency, extract_json_array, clean_label

__all__ = ['CustomJSONEncoder', 'format_currency', 'extract_json_array', 'clean_label']
