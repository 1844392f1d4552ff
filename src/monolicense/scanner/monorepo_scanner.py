# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Scanner runs the whole pipeline for one monorepo: discovery, lockfile
parsing, per project extraction and license enrichment, and aggregation."""

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from monolicense.adaptors.os import is_file, open_file, path_join
from monolicense.config.cli_configs import Config, default_config
from monolicense.dependency.build_scan_result import build_scan_result
from monolicense.dependency.detect_monorepo import ROOT_PROJECT_PATH, detect_monorepo
from monolicense.dependency.extract_dependencies import extract_dependencies
from monolicense.dependency.types import Project, ScanResult
from monolicense.license_detector.license_resolver import LicenseResolver
from monolicense.license_detector.package_info_cache import PackageInfoCache
from monolicense.parsers.pnpm_lockfile import parse_pnpm_lockfile
from monolicense.parsers.types import LockfileData
from monolicense.utils.errors import ScanError, format_scan_error
from monolicense.utils.result import Failure, Result, failure, success

logger = logging.getLogger("monolicense")

_PNPM_PACKAGE_MANAGER = re.compile(r"^pnpm@([^+\s]+)")


def detect_pnpm_version(root_manifest: dict[str, Any]) -> str | None:
    """Read the pnpm version pinned by the ``packageManager`` field, if any."""
    package_manager = root_manifest.get("packageManager")
    if not isinstance(package_manager, str):
        return None
    match = _PNPM_PACKAGE_MANAGER.match(package_manager)
    return match.group(1) if match else None


class MonorepoScanner:
    def __init__(self, config: Config = default_config, strict: bool = False) -> None:
        self.config = config
        # strict: a project missing from the lockfile fails the whole scan
        # instead of being skipped
        self.strict = strict

    def _project_dir(self, root: str, project_path: str) -> str:
        return root if project_path == ROOT_PROJECT_PATH else path_join(root, project_path)

    def _read_manifest(self, project_dir: str) -> dict[str, Any]:
        manifest_path = path_join(project_dir, self.config.manifest_filename)
        if not is_file(manifest_path):
            return {}
        try:
            manifest = json.loads(open_file(manifest_path))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unable to read %s, using defaults: %s", manifest_path, e)
            return {}
        return manifest if isinstance(manifest, dict) else {}

    def _build_project(
        self,
        lockfile: LockfileData,
        project_path: str,
        root: str,
        resolver: LicenseResolver,
    ) -> Result[Project, ScanError]:
        extracted = extract_dependencies(
            lockfile, project_path, self.config.workspace_protocol_prefix
        )
        if isinstance(extracted, Failure):
            return extracted

        is_root = project_path == ROOT_PROJECT_PATH
        manifest = self._read_manifest(self._project_dir(root, project_path))
        name = manifest.get("name")
        version = manifest.get("version")

        project = Project(
            name=name if isinstance(name, str) else ("root" if is_root else project_path),
            path=project_path,
            version=version if isinstance(version, str) else "0.0.0",
            dependencies=resolver.enrich(extracted.data.dependencies, project_path),
            dev_dependencies=resolver.enrich(
                extracted.data.dev_dependencies, project_path
            ),
            is_workspace_root=is_root,
        )
        logger.debug(
            "Scanned project %s (%s): %d dependencies, %d devDependencies",
            project.name,
            project_path,
            len(project.dependencies),
            len(project.dev_dependencies),
        )
        return success(project)

    def scan(self, root_path: str) -> Result[ScanResult, ScanError]:
        """Scan the pnpm monorepo at ``root_path``.

        Projects are processed concurrently but are always reported in
        discovery order.
        """
        monorepo_result = detect_monorepo(root_path, self.config)
        if isinstance(monorepo_result, Failure):
            return monorepo_result
        monorepo = monorepo_result.data

        lockfile_result = parse_pnpm_lockfile(
            path_join(monorepo.root, self.config.lockfile_filename)
        )
        if isinstance(lockfile_result, Failure):
            return lockfile_result
        lockfile = lockfile_result.data

        resolver = LicenseResolver(monorepo.root, PackageInfoCache(), self.config)
        logger.info(
            "Scanning %d projects in %s", len(monorepo.project_paths), monorepo.root
        )
        with ThreadPoolExecutor(max_workers=max(1, self.config.max_workers)) as executor:
            project_results = list(
                executor.map(
                    lambda project_path: self._build_project(
                        lockfile, project_path, monorepo.root, resolver
                    ),
                    monorepo.project_paths,
                )
            )

        projects: list[Project] = []
        for project_path, project_result in zip(monorepo.project_paths, project_results):
            if isinstance(project_result, Failure):
                if self.strict:
                    logger.error("%s", format_scan_error(project_result.error))
                    return failure(project_result.error)
                logger.warning(
                    "Skipping project %s: %s",
                    project_path,
                    format_scan_error(project_result.error),
                )
                continue
            projects.append(project_result.data)

        logger.debug("Resolved licenses of %d distinct packages", len(resolver.cache))
        return success(
            build_scan_result(
                projects,
                monorepo.root,
                lockfile.lockfile_version,
                detect_pnpm_version(self._read_manifest(monorepo.root)),
            )
        )
