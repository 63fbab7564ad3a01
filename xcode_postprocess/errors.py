# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import errno
from pathlib import Path
from typing import Union


class PostprocessError(Exception):
    pass


class TargetNotFoundError(PostprocessError):
    def __init__(self, target_name: str) -> None:
        super().__init__(f"Build target `{target_name}` not found in the project.")
        self.target_name = target_name


class PathNotFoundError(PostprocessError, FileNotFoundError):
    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(errno.ENOENT, "Required path does not exist", str(path))
        self.path = Path(path)


class InvalidConfigError(PostprocessError):
    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"Invalid config `{path}`: {reason}")
        self.path = Path(path)
