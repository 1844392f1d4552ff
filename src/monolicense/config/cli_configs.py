# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from dataclasses import dataclass


@dataclass
class Config:
    workspace_config_filename: str
    lockfile_filename: str
    manifest_filename: str
    workspace_protocol_prefix: str
    ignored_directories: list[str]
    preset_license_file_locations: list[str]
    max_workers: int


default_config = Config(
    workspace_config_filename="pnpm-workspace.yaml",
    lockfile_filename="pnpm-lock.yaml",
    manifest_filename="package.json",
    workspace_protocol_prefix="workspace:",
    ignored_directories=["node_modules"],
    preset_license_file_locations=[
        "LICENSE",
        "LICENSE.md",
        "LICENSE.txt",
        "LICENSE-MIT",
        "license",
        "license.md",
        "license.txt",
        "COPYING",
        "LICENCE",  # I know it is misspelled, but it is common in the wild
        "LICENCE.md",  # I know it is misspelled, but it is common in the wild
    ],
    max_workers=4,
)
