#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#
import os.path
import platform
import stat
from logging import getLogger
from pathlib import Path

import pytest
import tomlkit

from snowflake_connconfig.config_manager import ConfigManager
from snowflake_connconfig.log_configuration import (
    PACKAGE_LOGGER_NAME,
    EasyLoggingConfigPython,
)

logger = getLogger(PACKAGE_LOGGER_NAME)


@pytest.fixture(scope="function")
def temp_config_file(tmp_path_factory):
    config_file = tmp_path_factory.mktemp("config_file_path") / "config.toml"
    # Pre-create config file and setup correct permissions on it
    config_file.touch()
    config_file.chmod(stat.S_IRUSR | stat.S_IWUSR)
    return config_file


@pytest.fixture(scope="function")
def log_directory(tmp_path_factory):
    return tmp_path_factory.mktemp("log")


@pytest.fixture(scope="module")
def nonexist_file(tmp_path_factory):
    return tmp_path_factory.mktemp("log_path") / "nonexist_file"


@pytest.fixture(scope="module")
def inaccessible_file(tmp_path_factory):
    return tmp_path_factory.mktemp("inaccessible_file")


@pytest.fixture(scope="module")
def inabsolute_file(tmp_path_factory):
    directory = tmp_path_factory.mktemp("inabsolute_file")
    return os.path.basename(directory)


@pytest.fixture(scope="function")
def config_manager(
    request,
    temp_config_file,
    nonexist_file,
    inaccessible_file,
    inabsolute_file,
    log_directory,
):
    param = request.param
    configs = {
        "nonexist_path": {"log": {"save_logs": False, "path": str(nonexist_file)}},
        "inabsolute_path": {"log": {"save_logs": False, "path": str(inabsolute_file)}},
        "inaccessible_path": {
            "log": {"save_logs": False, "path": str(inaccessible_file)}
        },
        "save_logs": {
            "log": {"save_logs": True, "level": "DEBUG", "path": str(log_directory)}
        },
        "no_save_logs": {"log": {"save_logs": False, "path": str(log_directory)}},
        "no_log_table": {},
    }
    # create inaccessible path and make it inaccessible
    os.chmod(inaccessible_file, os.stat(inaccessible_file).st_mode & ~0o222)
    with open(temp_config_file, "w") as f:
        f.write(tomlkit.dumps(configs[param]))
    manager = ConfigManager(name="test", file_path=Path(temp_config_file))
    manager.add_option(name="log", env_name=False, default=dict())
    return manager


@pytest.mark.parametrize("config_manager", ["nonexist_path"], indirect=True)
def test_config_file_nonexist_path(config_manager, nonexist_file):
    assert not os.path.exists(nonexist_file)
    EasyLoggingConfigPython(config_manager)
    assert os.path.exists(nonexist_file)


@pytest.mark.parametrize("config_manager", ["inabsolute_path"], indirect=True)
def test_config_file_inabsolute_path(config_manager, inabsolute_file):
    with pytest.raises(FileNotFoundError) as e:
        EasyLoggingConfigPython(config_manager)
    assert f"Log path must be an absolute file path: {str(inabsolute_file)}" in str(e)


@pytest.mark.parametrize("config_manager", ["inaccessible_path"], indirect=True)
@pytest.mark.skipif(
    platform.system() == "Windows", reason="Test not applicable to Windows"
)
def test_config_file_inaccessible_path(config_manager, inaccessible_file):
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("root can write to any directory")
    with pytest.raises(PermissionError) as e:
        EasyLoggingConfigPython(config_manager)
    assert (
        f"log path: {str(inaccessible_file)} is not accessible, please verify your config file"
        in str(e)
    )


@pytest.mark.parametrize("config_manager", ["save_logs"], indirect=True)
def test_save_logs(config_manager, log_directory):
    easy_logging = EasyLoggingConfigPython(config_manager)
    handler = easy_logging.create_log()
    try:
        assert handler is not None
        logger.info("this is a test logger")
        logger.debug("connecting with password=testpassword")
        handler.flush()
        log_file = os.path.join(log_directory, easy_logging.log_file_name)
        assert easy_logging.log_file_name.startswith("python-connconfig-")
        with open(log_file) as f:
            data = f.read()
        assert "this is a test logger" in data
        assert "password=****" in data
        assert "testpassword" not in data
    finally:
        logger.removeHandler(handler)
        handler.close()
        # reset log level
        logger.setLevel(0)


@pytest.mark.parametrize("config_manager", ["no_save_logs"], indirect=True)
def test_no_save_logs(config_manager, log_directory):
    easy_logging = EasyLoggingConfigPython(config_manager)
    assert easy_logging.create_log() is None
    logger.info("this is a test logger")

    assert os.listdir(log_directory) == []


@pytest.mark.parametrize("config_manager", ["no_log_table"], indirect=True)
def test_no_log_table(config_manager):
    easy_logging = EasyLoggingConfigPython(config_manager)
    assert easy_logging.save_logs is False
    assert easy_logging.path is None
    assert easy_logging.create_log() is None
