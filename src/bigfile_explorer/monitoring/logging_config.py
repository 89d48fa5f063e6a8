# File: src/bigfile_explorer/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime

from ..utils.logger import ROOT_LOGGER_NAME

class LogConfig:
    def __init__(
        self,
        log_dir: str = "logs",
        level: str = "INFO",
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.log_dir = log_dir
        self.level = level
        self.max_size = max_size
        self.backup_count = backup_count

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

    def setup_logging(self) -> logging.Logger:
        # Create formatters
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        # Set up file handler
        log_file = os.path.join(
            self.log_dir,
            f'explorer_{datetime.now().strftime("%Y%m%d")}.log'
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self.max_size,
            backupCount=self.backup_count
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)

        # Set up console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(getattr(logging, self.level.upper(), logging.INFO))

        # Replace the package logger's default handler
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
        package_logger.setLevel(logging.DEBUG)
        package_logger.addHandler(file_handler)
        package_logger.addHandler(console_handler)

        return package_logger
