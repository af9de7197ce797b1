#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import stat
from pathlib import Path
from typing import Any, Callable, Dict, Union

import pytest

files = Dict[str, Union[str, "files"]]


def tmp_files_helper(cwd: Path, to_create: files) -> None:
    for k, v in to_create.items():
        new_file = cwd / k
        if isinstance(v, str):
            new_file.touch()
            new_file.write_text(v)
            new_file.chmod(stat.S_IRUSR | stat.S_IWUSR)
        else:
            new_file.mkdir()
            tmp_files_helper(new_file, v)


@pytest.fixture
def tmp_files(tmp_path: Path) -> Callable[[files], Path]:
    def create_tmp_files(to_create: files) -> Path:
        tmp_files_helper(tmp_path, to_create)
        return tmp_path

    return create_tmp_files


@pytest.fixture
def credentials() -> dict[str, Any]:
    return {
        "username": "jdoe",
        "password": "testpassword",
        "account": "testaccount",
    }
