#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#


from __future__ import annotations

import logging
import os
from datetime import datetime

from .config_manager import CONFIG_MANAGER, ConfigManager
from .constants import CONFIG_DIR
from .secret_detector import SecretDetector

PACKAGE_LOGGER_NAME = "snowflake_connconfig"


class EasyLoggingConfigPython:
    """Logging set up from the [log] table of the configuration file.

    Recognized keys are level (default INFO), path (default <config dir>/logs)
    and save_logs, which has to be true for create_log to do anything.
    """

    def __init__(self, manager: ConfigManager = CONFIG_MANAGER):
        self._manager = manager
        self.path = None
        self.level = None
        self.save_logs = False
        self.log_file_name = None
        self.parse_config_file()

    def parse_config_file(self):
        self._manager.read_config()
        if log := self._manager["log"]:
            self.save_logs = bool(log.get("save_logs", False))
            self.level = log.get("level") or "INFO"
            self.path = log.get("path") or os.path.join(CONFIG_DIR, "logs")

            if not os.path.isabs(self.path):
                raise FileNotFoundError(
                    f"Log path must be an absolute file path: {self.path}"
                )
            # if log path does not exist, create it, else check accessibility
            if not os.path.exists(self.path):
                os.makedirs(self.path, exist_ok=True)
            elif not os.access(self.path, os.R_OK | os.W_OK):
                raise PermissionError(
                    f"log path: {self.path} is not accessible, please verify your config file"
                )

    # create_log() is called outside __init__() so that it can be easily turned off
    def create_log(self) -> logging.Handler | None:
        if not self.save_logs:
            return None
        self.log_file_name = (
            f"python-connconfig-{datetime.now().strftime('%Y-%m-%d-%H-%M-%S')}.log"
        )
        level = logging.getLevelName(self.level)
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        logger.setLevel(level)
        ch = logging.FileHandler(os.path.join(self.path, self.log_file_name))
        ch.setLevel(level)
        ch.setFormatter(
            SecretDetector(
                "%(asctime)s - %(threadName)s %(filename)s:%(lineno)d - %(funcName)s() - %(levelname)s - %(message)s"
            )
        )
        logger.addHandler(ch)
        return ch
