#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_path

APP_NAME = "snowflake"


def _resolve_config_dir() -> Path:
    """Decide on what directory configuration files are read from.

    In case a folder exists (which can be customized with the environmental
    variable `SNOWFLAKE_HOME`) we use that directory. If this folder does not
    exist we'll fall back to the platformdirs user config directory.

    This helper function was introduced to make this code testable.
    """
    snowflake_home = Path(
        os.path.expanduser(os.environ.get("SNOWFLAKE_HOME", "~/.snowflake/"))
    )
    if snowflake_home.exists():
        return snowflake_home
    # see https://platformdirs.readthedocs.io/ for the per platform locations
    return user_config_path(appname=APP_NAME, appauthor=False)
