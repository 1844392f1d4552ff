# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import logging
from typing import Any

import yaml

from monolicense.adaptors.os import open_file
from monolicense.parsers.types import WorkspaceConfig
from monolicense.utils.errors import (
    ScanError,
    workspace_config_not_found,
    workspace_config_parse_error,
)
from monolicense.utils.result import Result, failure, success

logger = logging.getLogger("monolicense")


def _validate_workspace_config(
    raw: dict[Any, Any], path: str
) -> Result[WorkspaceConfig, ScanError]:
    packages = raw.get("packages")
    if not packages and not isinstance(packages, list):
        return failure(
            workspace_config_parse_error(path, "Missing required field: packages")
        )
    if not isinstance(packages, list):
        return failure(
            workspace_config_parse_error(path, 'Field "packages" must be an array')
        )

    # community-authored file, tolerate junk entries
    return success(WorkspaceConfig(tuple(p for p in packages if isinstance(p, str))))


def parse_pnpm_workspace_from_string(
    content: str, path: str = "<string>"
) -> Result[WorkspaceConfig, ScanError]:
    """Parse pnpm-workspace.yaml content into a WorkspaceConfig.

    An empty document is a valid workspace with no package globs.

    Args:
        content: Raw YAML content of the workspace config
        path: Label used in error messages

    Returns:
        The parsed config, or a WORKSPACE_CONFIG_PARSE_ERROR failure
    """
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        return failure(workspace_config_parse_error(path, str(e)))

    if parsed is None:
        return success(WorkspaceConfig(()))
    if not isinstance(parsed, dict):
        return failure(workspace_config_parse_error(path, "Root must be an object"))
    return _validate_workspace_config(parsed, path)


def parse_pnpm_workspace(path: str) -> Result[WorkspaceConfig, ScanError]:
    try:
        content = open_file(path)
    except FileNotFoundError:
        return failure(workspace_config_not_found(path))
    except OSError as e:
        return failure(workspace_config_parse_error(path, str(e)))

    logger.debug("Parsing workspace config %s", path)
    return parse_pnpm_workspace_from_string(content, path)
