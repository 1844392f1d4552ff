# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Find the projects of a pnpm workspace.

Workspace globs follow the pnpm/fast-glob conventions: ``*`` and ``?`` stay
inside one path segment, ``**`` spans any number of segments, and patterns
prefixed with ``!`` exclude whatever they match. As with fast-glob, wildcards
skip dot directories such as ``.next`` unless the pattern spells the dot out.
"""

import logging
import re

from monolicense.adaptors.os import (
    absolute_path,
    is_file,
    path_join,
    relative_path,
    walk_directory,
)
from monolicense.config.cli_configs import Config, default_config
from monolicense.dependency.types import MonorepoInfo
from monolicense.parsers.pnpm_workspace import parse_pnpm_workspace
from monolicense.utils.errors import ScanError
from monolicense.utils.result import Failure, Result, success

logger = logging.getLogger("monolicense")

ROOT_PROJECT_PATH = "."

_ANY_SEGMENTS = r"(?:(?!\.)[^/]+/)*"


def _segment_to_regex(segment: str) -> str:
    # wildcards never match a leading dot, only a literal one does
    regex = r"(?!\.)" if segment[:1] in ("*", "?", "[") else ""
    i = 0
    while i < len(segment):
        char = segment[i]
        if char == "*":
            regex += "[^/]*"
        elif char == "?":
            regex += "[^/]"
        elif char == "[":
            end = segment.find("]", i + 1)
            if end == -1:
                regex += re.escape(char)
            else:
                body = segment[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                regex += f"[{body}]"
                i = end
        elif char == "{":
            end = segment.find("}", i + 1)
            if end == -1:
                regex += re.escape(char)
            else:
                options = segment[i + 1 : end].split(",")
                regex += "(?:" + "|".join(_segment_to_regex(o) for o in options) + ")"
                i = end
        else:
            regex += re.escape(char)
        i += 1
    return regex


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a workspace glob into a regex matching whole relative POSIX paths."""
    if pattern.startswith("./"):
        pattern = pattern[2:]
    segments = [segment for segment in pattern.split("/") if segment]

    regex = ""
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        if segment == "**":
            regex += _ANY_SEGMENTS + (r"(?!\.)[^/]*" if is_last else "")
        else:
            regex += _segment_to_regex(segment) + ("" if is_last else "/")
    return re.compile(f"^{regex}$")


def _manifest_patterns(globs: list[str], manifest_filename: str) -> list[re.Pattern[str]]:
    return [
        glob_to_regex(f"{glob.rstrip('/')}/{manifest_filename}") for glob in globs
    ]


def _find_manifests(root: str, config: Config) -> list[str]:
    manifests: list[str] = []
    for dirpath, dirnames, filenames in walk_directory(root):
        # prune in place so the walk never descends into ignored trees
        dirnames[:] = sorted(d for d in dirnames if d not in config.ignored_directories)
        if config.manifest_filename not in filenames:
            continue
        manifest = path_join(relative_path(dirpath, root), config.manifest_filename)
        manifests.append(manifest.replace("\\", "/").removeprefix("./"))
    return manifests


def enumerate_projects(
    root: str, workspace_globs: list[str], config: Config = default_config
) -> list[str]:
    """Return the sorted, de-duplicated project directories matched by the globs.

    Excludes are evaluated against every expanded match, so a pattern such as
    ``!**/test/**`` removes test projects at any depth.
    """
    include_globs = [glob for glob in workspace_globs if not glob.startswith("!")]
    exclude_globs = [glob[1:] for glob in workspace_globs if glob.startswith("!")]
    includes = _manifest_patterns(include_globs, config.manifest_filename)
    excludes = _manifest_patterns(exclude_globs, config.manifest_filename)

    suffix = f"/{config.manifest_filename}"
    project_paths: set[str] = set()
    for manifest in _find_manifests(root, config):
        if manifest == config.manifest_filename:
            continue
        if not any(pattern.match(manifest) for pattern in includes):
            continue
        if any(pattern.match(manifest) for pattern in excludes):
            continue
        project_paths.add(manifest[: -len(suffix)])

    if is_file(path_join(root, config.manifest_filename)):
        project_paths.add(ROOT_PROJECT_PATH)

    return sorted(project_paths)


def detect_monorepo(
    root_path: str, config: Config = default_config
) -> Result[MonorepoInfo, ScanError]:
    """Read the workspace config of ``root_path`` and enumerate its projects.

    Args:
        root_path: Path to the monorepo root directory
        config: Well known filenames and ignored directories

    Returns:
        Monorepo info with root path, workspace globs and project paths, or
        the workspace config error
    """
    root = absolute_path(root_path)
    config_result = parse_pnpm_workspace(
        path_join(root, config.workspace_config_filename)
    )
    if isinstance(config_result, Failure):
        return config_result

    workspace_globs = config_result.data.packages
    project_paths = enumerate_projects(root, list(workspace_globs), config)
    logger.debug(
        "Found %d projects in %s using globs %s",
        len(project_paths),
        root,
        list(workspace_globs),
    )
    return success(
        MonorepoInfo(
            root=root,
            workspace_globs=workspace_globs,
            project_paths=tuple(project_paths),
        )
    )
