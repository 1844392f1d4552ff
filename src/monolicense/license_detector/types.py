# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from dataclasses import dataclass
from enum import Enum

UNKNOWN_LICENSE = "UNKNOWN"
# npm keyword for proprietary packages, not an SPDX identifier
UNLICENSED = "UNLICENSED"


class LicenseSource(Enum):
    PACKAGE_JSON = "package.json"
    PACKAGE_JSON_ARRAY = "package.json-array"
    LICENSE_FILE = "license-file"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LicenseInfo:
    spdx_id: str  # SPDX expression, UNKNOWN or UNLICENSED, never empty
    source: LicenseSource
    raw_value: str | None = None  # original text, only when normalization changed it


def unknown_license() -> LicenseInfo:
    return LicenseInfo(spdx_id=UNKNOWN_LICENSE, source=LicenseSource.UNKNOWN)
