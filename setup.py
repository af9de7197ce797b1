#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

import os

from setuptools import find_packages, setup

CONNCONFIG_SRC_DIR = os.path.join("src", "snowflake_connconfig")

VERSION = (1, 0, 0, None)  # Default
with open(os.path.join(CONNCONFIG_SRC_DIR, "version.py"), encoding="utf-8") as f:
    exec(f.read())
version = ".".join([str(v) for v in VERSION if v is not None])

setup(
    name="snowflake-connconfig",
    version=version,
    description="Connection configuration building and validation for Snowflake clients",
    license="Apache-2.0",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    install_requires=[
        "platformdirs>=2.6.0,<5.0.0",
        "tomlkit>=0.11.5",
        "typing_extensions>=4.3,<5",
    ],
    extras_require={
        "development": [
            "pytest",
            "pytest-cov",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Database",
    ],
)
