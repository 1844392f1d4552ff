# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from abc import ABC, abstractmethod

from monolicense.dependency.types import ScanResult


class ReportingWriter(ABC):
    @abstractmethod
    def write(self, scan_result: ScanResult) -> str:
        raise NotImplementedError
