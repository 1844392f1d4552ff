# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import threading

from monolicense.license_detector.types import LicenseInfo


class PackageInfoCache:
    """License lookups keyed by name@version, shared by the workers of one scan.

    Create one per scan and pass it in; it is never a module level singleton.
    """

    def __init__(self) -> None:
        self._entries: dict[str, LicenseInfo] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(name: str, version: str) -> str:
        return f"{name}@{version}"

    def get(self, name: str, version: str) -> LicenseInfo | None:
        with self._lock:
            return self._entries.get(self.key(name, version))

    def set(self, name: str, version: str, license_info: LicenseInfo) -> None:
        with self._lock:
            self._entries[self.key(name, version)] = license_info

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
