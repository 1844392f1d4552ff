# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from monolicense.license_detector.spdx_corrector import correct_spdx
from monolicense.license_detector.types import UNKNOWN_LICENSE, UNLICENSED


def normalize_license(license_text: str) -> str:
    """Normalize a free-form license string to an SPDX expression.

    Returns UNLICENSED for the npm proprietary keyword and UNKNOWN when the
    string cannot be recognized.
    """
    trimmed = license_text.strip()
    if not trimmed:
        return UNKNOWN_LICENSE

    if trimmed.upper() == UNLICENSED:
        return UNLICENSED

    corrected = correct_spdx(trimmed)
    if corrected is None:
        return UNKNOWN_LICENSE
    return corrected
