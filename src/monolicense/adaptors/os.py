# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Here we collect a set of OS wrappers and adaptors to be easily replaced during testing and debugging."""

import os
from typing import Iterator


def is_file(file_path: str) -> bool:
    return os.path.isfile(file_path)


def is_dir(path: str) -> bool:
    return os.path.isdir(path)


def absolute_path(path: str) -> str:
    return os.path.abspath(path)


def walk_directory(path: str) -> Iterator[tuple[str, list[str], list[str]]]:
    return os.walk(path)


def relative_path(path: str, start: str) -> str:
    return os.path.relpath(path, start)


def open_file(file_path: str) -> str:
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            return file.read()
    except UnicodeDecodeError:
        with open(file_path, "r", encoding="latin-1") as file:
            return file.read()


def write_file(file_path: str, content: str) -> None:
    with open(file_path, "w", encoding="utf-8") as file:
        file.write(content)


def path_join(path: str, *paths: str) -> str:
    return os.path.join(path, *paths)
