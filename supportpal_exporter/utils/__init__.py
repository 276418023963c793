"""
Utility functions
"""
from supportpal_exporter.utils.logger import setup_logger, get_logger
from supportpal_exporter.utils.slug import slugify, label_name

__all__ = [
    "setup_logger",
    "get_logger",
    "slugify",
    "label_name",
]
