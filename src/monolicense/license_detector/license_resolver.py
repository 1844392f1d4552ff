# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Resolve the license of installed dependencies.

Sources are tried in this order, the first one that yields a known license
wins:

1. the ``license`` field of the installed package.json
2. the legacy ``licenses`` array (or ``license`` object) of that package.json
3. the first license file found in the package directory

If none of them is conclusive the license stays UNKNOWN.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from monolicense.adaptors.os import is_dir, is_file, open_file, path_join
from monolicense.config.cli_configs import Config, default_config
from monolicense.dependency.types import Dependency
from monolicense.license_detector.extract_license import (
    extract_license_from_file,
    extract_license_from_package_json,
)
from monolicense.license_detector.package_info_cache import PackageInfoCache
from monolicense.license_detector.types import (
    UNKNOWN_LICENSE,
    LicenseInfo,
    unknown_license,
)
from monolicense.utils.errors import format_scan_error
from monolicense.utils.result import Failure

logger = logging.getLogger("monolicense")


class LicenseResolver:
    def __init__(
        self,
        monorepo_root: str,
        cache: PackageInfoCache,
        config: Config = default_config,
    ) -> None:
        self.monorepo_root = monorepo_root
        self.cache = cache
        self.config = config

    def _candidate_dirs(self, name: str, version: str, project_path: str) -> list[str]:
        # pnpm appends peer suffixes such as 1.0.0(react@18.2.0) to versions
        plain_version = version.split("(", 1)[0]
        store_dir_name = f"{name.replace('/', '+')}@{plain_version}"
        project_dir = (
            self.monorepo_root
            if project_path == "."
            else path_join(self.monorepo_root, project_path)
        )
        return [
            path_join(project_dir, "node_modules", name),
            path_join(self.monorepo_root, "node_modules", name),
            path_join(
                self.monorepo_root,
                "node_modules",
                ".pnpm",
                store_dir_name,
                "node_modules",
                name,
            ),
        ]

    def _find_package_dir(
        self, name: str, version: str, project_path: str
    ) -> str | None:
        for candidate in self._candidate_dirs(name, version, project_path):
            if is_dir(candidate):
                return candidate
        return None

    def _license_from_manifest(self, package_dir: str) -> LicenseInfo | None:
        manifest_path = path_join(package_dir, self.config.manifest_filename)
        if not is_file(manifest_path):
            return None
        try:
            content = open_file(manifest_path)
        except OSError as e:
            logger.warning("Unable to read %s: %s", manifest_path, e)
            return None

        result = extract_license_from_package_json(content, manifest_path)
        if isinstance(result, Failure):
            logger.warning("%s", format_scan_error(result.error))
            return None
        return result.data

    def _license_from_files(self, package_dir: str) -> LicenseInfo | None:
        for location in self.config.preset_license_file_locations:
            license_path = path_join(package_dir, location)
            if not is_file(license_path):
                continue
            try:
                content = open_file(license_path)
            except OSError as e:
                logger.warning("Unable to read %s: %s", license_path, e)
                continue
            result = extract_license_from_file(content)
            if isinstance(result, Failure):
                continue
            return result.data
        return None

    def _resolve_uncached(
        self, name: str, version: str, project_path: str
    ) -> LicenseInfo:
        package_dir = self._find_package_dir(name, version, project_path)
        if package_dir is None:
            logger.debug("Package %s@%s is not installed", name, version)
            return unknown_license()

        manifest_license = self._license_from_manifest(package_dir)
        if manifest_license and manifest_license.spdx_id != UNKNOWN_LICENSE:
            return manifest_license

        file_license = self._license_from_files(package_dir)
        if file_license and file_license.spdx_id != UNKNOWN_LICENSE:
            return file_license

        # keeps the unrecognized raw manifest value, if there was one
        return manifest_license or unknown_license()

    def resolve(self, dependency: Dependency, project_path: str) -> LicenseInfo:
        if dependency.is_workspace_dependency:
            return dependency.license

        cached = self.cache.get(dependency.name, dependency.version)
        if cached is not None:
            logger.debug(
                "License cache hit for %s@%s", dependency.name, dependency.version
            )
            return cached

        license_info = self._resolve_uncached(
            dependency.name, dependency.version, project_path
        )
        self.cache.set(dependency.name, dependency.version, license_info)
        return license_info

    def enrich(
        self, dependencies: Sequence[Dependency], project_path: str
    ) -> tuple[Dependency, ...]:
        return tuple(
            replace(dependency, license=self.resolve(dependency, project_path))
            for dependency in dependencies
        )
