# flu/core/logging_config.py
import logging
import os
from datetime import datetime
from typing import Optional, Dict, Any, List


class LoggingManager:
    """Centralized logging configuration for the flu toolkit"""

    DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

    @staticmethod
    def resolve_level(verbose: bool, config: Optional[Dict[str, Any]] = None) -> int:
        """Pick the log level: --verbose wins, then logging.level, then INFO"""
        if verbose:
            return logging.DEBUG
        name = (config or {}).get('logging', {}).get('level') or 'INFO'
        level = logging.getLevelName(str(name).upper())
        return level if isinstance(level, int) else logging.INFO

    @staticmethod
    def configure(
        verbose: bool = False,
        log_file: Optional[str] = None,
        component: str = "flu",
        log_dir: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> logging.Logger:
        """Configure logging for the application

        Args:
            verbose: Enable debug logging if True
            log_file: Specific log file path (overrides automatic naming)
            component: Component name for logger and automatic log file naming
            log_dir: Directory for log files; falls back to logging.log_dir in config
            config: Configuration dictionary that may contain logging settings

        Returns:
            Configured logger instance
        """
        logging_config = (config or {}).get('logging', {})
        log_level = LoggingManager.resolve_level(verbose, config)
        log_format = logging_config.get('format') or LoggingManager.DEFAULT_FORMAT
        log_dir = log_dir or logging_config.get('log_dir')

        handlers: List[logging.Handler] = [logging.StreamHandler()]

        if not log_file and log_dir:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            os.makedirs(log_dir, exist_ok=True)
            log_file = os.path.join(log_dir, f"{component}_{timestamp}.log")

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(log_format, LoggingManager.DEFAULT_DATE_FORMAT))
            handlers.append(file_handler)

        logging.basicConfig(
            level=log_level,
            format=log_format,
            datefmt=LoggingManager.DEFAULT_DATE_FORMAT,
            handlers=handlers,
            force=True
        )

        logger = logging.getLogger(component)
        logger.debug(f"Logging initialized for {component} at level {logging.getLevelName(log_level)}")
        if log_file:
            logger.info(f"Log file: {log_file}")

        return logger

