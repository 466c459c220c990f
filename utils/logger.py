# utils/logger.py
# -*- coding: utf-8 -*-
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggerSetup:
    """
    统一日志入口：控制台 + log/<caller_file>.log
    用法：logger = LoggerSetup(caller_file="aws_lb", log_dir="log").get_logger()
    """

    def __init__(self, caller_file: str, log_dir: Optional[str] = None,
                 quiet_mode: bool = False, level: int = logging.INFO):
        self.caller_file = caller_file
        self.log_dir = log_dir or os.getenv("LOG_DIR", "log")
        self.quiet_mode = quiet_mode
        self.level = level

    def get_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.caller_file)
        if logger.handlers:
            return logger  # 已初始化，避免重复 handler
        logger.setLevel(self.level)
        formatter = logging.Formatter(LOG_FORMAT)

        if not self.quiet_mode:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(formatter)
            logger.addHandler(console)

        try:
            os.makedirs(self.log_dir, exist_ok=True)
            fh = logging.FileHandler(os.path.join(self.log_dir, f"{self.caller_file}.log"), encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)
        except OSError as e:
            logger.warning(f"[!] log file disabled ({self.log_dir}): {e}")

        return logger
