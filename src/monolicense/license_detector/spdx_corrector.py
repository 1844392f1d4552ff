# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Correct free-form license strings into canonical SPDX expressions.

Validation and canonical casing come from the SPDX license index bundled
with ``license-expression``. The alias table covers the spellings that show
up in package.json files in the wild but are not SPDX keys.
"""

import logging
import re
from functools import lru_cache

from license_expression import ExpressionError, Licensing, get_spdx_licensing

logger = logging.getLogger("monolicense")

LICENSE_ALIASES: dict[str, str] = {
    # MIT variants
    "mit": "MIT",
    "mit license": "MIT",
    "the mit license": "MIT",
    "mit/x11": "MIT",
    "expat": "MIT",
    # Apache variants
    "apache": "Apache-2.0",
    "apache2": "Apache-2.0",
    "apache 2": "Apache-2.0",
    "apache 2.0": "Apache-2.0",
    "apache-2": "Apache-2.0",
    "apache v2": "Apache-2.0",
    "apache license 2.0": "Apache-2.0",
    "apache license, version 2.0": "Apache-2.0",
    "apache license version 2.0": "Apache-2.0",
    "apache software license": "Apache-2.0",
    # BSD variants
    "bsd": "BSD-2-Clause",
    "bsd license": "BSD-2-Clause",
    "simplified bsd": "BSD-2-Clause",
    "bsd 2-clause": "BSD-2-Clause",
    "bsd-2": "BSD-2-Clause",
    "new bsd": "BSD-3-Clause",
    "modified bsd": "BSD-3-Clause",
    "bsd 3-clause": "BSD-3-Clause",
    "bsd-3": "BSD-3-Clause",
    # GPL variants
    "gpl": "GPL-3.0-or-later",
    "gplv2": "GPL-2.0-only",
    "gpl v2": "GPL-2.0-only",
    "gpl2": "GPL-2.0-only",
    "gplv3": "GPL-3.0-only",
    "gpl v3": "GPL-3.0-only",
    "gpl3": "GPL-3.0-only",
    "lgpl": "LGPL-3.0-or-later",
    "lgplv3": "LGPL-3.0-only",
    "lgpl v3": "LGPL-3.0-only",
    "lgplv2.1": "LGPL-2.1-only",
    "agplv3": "AGPL-3.0-only",
    # Others
    "isc": "ISC",
    "isc license": "ISC",
    "mpl 2.0": "MPL-2.0",
    "mozilla public license 2.0": "MPL-2.0",
    "public domain": "Unlicense",
    "the unlicense": "Unlicense",
    "cc0": "CC0-1.0",
    "cc0 1.0": "CC0-1.0",
    "wtfpl": "WTFPL",
    "boost": "BSL-1.0",
    "zlib/libpng": "Zlib",
}

_OPERATOR_SPLIT = re.compile(r"(\s+(?:AND|OR|WITH)\s+|\(|\))", re.IGNORECASE)


@lru_cache(maxsize=None)
def _spdx_licensing() -> Licensing:
    # Loading the bundled license index takes a while, do it once per process
    return get_spdx_licensing()


def _validated(expression: str) -> str | None:
    try:
        info = _spdx_licensing().validate(expression)
    except (ExpressionError, AttributeError) as e:
        # validate() itself can fail while reporting some syntax errors
        logger.debug("Invalid license expression %r: %s", expression, e)
        return None
    if info.errors or info.normalized_expression is None:
        return None
    return str(info.normalized_expression)


def _alias_for(text: str) -> str | None:
    return LICENSE_ALIASES.get(" ".join(text.lower().split()))


def _correct_operands(expression: str) -> str:
    corrected: list[str] = []
    for token in _OPERATOR_SPLIT.split(expression):
        stripped = token.strip()
        if not stripped:
            continue
        if stripped.upper() in ("AND", "OR", "WITH"):
            corrected.append(f" {stripped.upper()} ")
        elif stripped in ("(", ")"):
            corrected.append(stripped)
        else:
            corrected.append(_alias_for(stripped) or stripped)
    return "".join(corrected)


def correct_spdx(license_text: str) -> str | None:
    """Return the canonical SPDX expression for ``license_text`` or None.

    Expression operators are kept, so "MIT OR Apache 2.0" becomes
    "MIT OR Apache-2.0" rather than one side of the choice.
    """
    text = license_text.strip()
    if not text:
        return None

    alias = _alias_for(text)
    if alias is not None:
        return _validated(alias)

    direct = _validated(text)
    if direct is not None:
        return direct

    corrected = _correct_operands(text)
    if corrected != text:
        result = _validated(corrected)
        if result is not None:
            logger.debug("Corrected license %r to %r", license_text, result)
            return result

    return None
