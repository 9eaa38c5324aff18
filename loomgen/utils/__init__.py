"""
Logging, configuration and CSV export helpers.
"""

from .csv_writer import CsvWriter, animation_data_filename, export_model
from .config_manager import ConfigManager, parse_value, update_nested_dict
from .log_config import setup_logging

__all__ = [
    "CsvWriter",
    "animation_data_filename",
    "export_model",
    "ConfigManager",
    "parse_value",
    "update_nested_dict",
    "setup_logging",
]
