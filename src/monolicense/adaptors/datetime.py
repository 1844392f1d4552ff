# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Here we collect a set of datetime wrappers and adaptors to be easily replaced during testing and debugging."""

from datetime import datetime

import pytz


def get_datetime_now() -> datetime:
    return datetime.now(pytz.UTC)


def to_iso_timestamp(moment: datetime) -> str:
    """Render a moment as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T10:00:00.000Z."""
    if moment.tzinfo is None:
        moment = pytz.UTC.localize(moment)
    utc_moment = moment.astimezone(pytz.UTC)
    milliseconds = utc_moment.microsecond // 1000
    return utc_moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{milliseconds:03d}Z"
