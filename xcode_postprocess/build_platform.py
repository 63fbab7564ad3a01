# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

from __future__ import annotations

from enum import Enum


class BuildTarget(str, Enum):
    ios = "ios"
    tvos = "tvos"
    android = "android"
    standalone_osx = "standalone_osx"
    standalone_windows = "standalone_windows"
    webgl = "webgl"

    def __str__(self) -> str:
        return self.value


class IPhoneArchitecture(Enum):
    """
    Values match the integers stored in the `Architecture` player setting.
    """

    ARMv7 = 0
    ARM64 = 1
    Universal = 2

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_string(cls, value: str) -> IPhoneArchitecture:
        if value.isdigit():
            return cls(int(value))
        for architecture in cls:
            if architecture.name.lower() == value.lower():
                return architecture
        raise ValueError(
            f"Unknown architecture `{value}`, expected one of: {', '.join(a.name for a in cls)}."
        )
