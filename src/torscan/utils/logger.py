#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan Logger Utility

Provides leveled, colored console logging for the dihedral scan tools.
"""

from typing import Optional
from datetime import datetime
import os


class Logger:
    """
    Logger class for handling scan progress and debug information with colored output.

    Attributes:
        debug_level (int): Verbosity of debug output (0 disables DEBUG lines)
        log_file (Optional[str]): Path to log file
        module_name (str): Name of the module using this logger
        quiet (bool): Suppress console output (log file is still written)
    """
    def __init__(self, debug: int = 0, log_file: Optional[str] = None, module_name: str = "",
                 quiet: bool = False):
        self.debug_level = int(debug)
        self.log_file = log_file
        self.module_name = module_name
        self.quiet = quiet

        # ANSI color codes for different log levels
        self.colors = {
            "INFO": "\033[94m",    # Blue
            "DEBUG": "\033[90m",   # Gray
            "WARNING": "\033[93m", # Yellow
            "ERROR": "\033[91m",   # Red
            "RESET": "\033[0m"      # Reset color
        }

        self.level_formats = {
            "INFO": "INFO ",
            "DEBUG": "DEBUG",
            "WARNING": "WARN ",
            "ERROR": "ERROR"
        }

    @property
    def is_debug(self) -> bool:
        """Whether DEBUG messages are emitted."""
        return self.debug_level > 0

    def child(self, module_name: str) -> 'Logger':
        """
        Create a logger for a sub-module sharing this logger's settings.

        Args:
            module_name (str): Module tag printed with every message

        Returns:
            Logger: New logger instance
        """
        return Logger(self.debug_level, self.log_file, module_name, self.quiet)

    def log(self, message: str, level: str = "INFO", indent: int = 0) -> None:
        """
        Log a message with proper formatting and color.

        Args:
            message (str): The message to log
            level (str): Log level (INFO, DEBUG, WARNING, ERROR)
            indent (int): Number of spaces to indent the message
        """
        if level == "DEBUG" and not self.is_debug:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        module_part = f"[{self.module_name}] " if self.module_name else ""
        log_message = f"[{timestamp}] [{self.level_formats.get(level, level)}] {module_part}{' ' * indent}{message}"

        if not self.quiet:
            print(f"{self.colors.get(level, self.colors['RESET'])}{log_message}{self.colors['RESET']}")

        # Log file gets the uncolored line
        if self.log_file:
            log_dir = os.path.dirname(self.log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(log_message + "\n")

    def info(self, message: str, indent: int = 0) -> None:
        """Log an info message."""
        self.log(message, "INFO", indent)

    def debug(self, message: str, indent: int = 0, level: int = 1) -> None:
        """
        Log a debug message.

        Args:
            message (str): The message to log
            indent (int): Number of spaces to indent the message
            level (int): Minimum debug level required to emit the message
        """
        if self.debug_level >= level:
            self.log(message, "DEBUG", indent)

    def warning(self, message: str, indent: int = 0) -> None:
        """Log a warning message."""
        self.log(message, "WARNING", indent)

    def error(self, message: str, indent: int = 0) -> None:
        """Log an error message."""
        self.log(message, "ERROR", indent)

    def section(self, title: str) -> None:
        """
        Log a section title.

        Args:
            title (str): The section title
        """
        self.info(f"=== {title} ===")

    def log_dict(self, data: dict, title: str = "Parameters", indent: int = 0) -> None:
        """
        Log dictionary data in a structured format.

        Args:
            data (dict): Dictionary to log
            title (str): Title for the dictionary section
            indent (int): Number of spaces to indent
        """
        if not data:
            return

        self.section(title)
        for key, value in data.items():
            if isinstance(value, (list, tuple)):
                value_str = ", ".join(str(v) for v in value)
            else:
                value_str = str(value)
            self.info(f"{key}: {value_str}", indent + 2)
