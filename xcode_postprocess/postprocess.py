# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from .build_platform import BuildTarget, IPhoneArchitecture
from .diagnostics import IDiagnosticSink, LoggingDiagnosticSink
from .file_stager import stage_files
from .postprocess_config import PostprocessConfig
from .project_patcher import patch_project

_LOGGER: logging.Logger = logging.getLogger(__name__)

SUPPORTED_BUILD_TARGET: BuildTarget = BuildTarget.ios


class PostprocessState(str, Enum):
    not_run = "not_run"
    complete = "complete"
    failed = "failed"


class Postprocessor:
    def __init__(
        self,
        config: Optional[PostprocessConfig] = None,
        diagnostic_sink: Optional[IDiagnosticSink] = None,
    ) -> None:
        self.config: PostprocessConfig = config or PostprocessConfig()
        self.diagnostic_sink: IDiagnosticSink = (
            diagnostic_sink or LoggingDiagnosticSink()
        )
        self.state: PostprocessState = PostprocessState.not_run

    def run(
        self,
        build_target: BuildTarget,
        destination: Path,
        architecture: IPhoneArchitecture,
    ) -> bool:
        """
        Patches the exported project and stages template files into it.

        Returns `False` without touching anything for build targets other than iOS.
        Errors propagate to the caller and leave the state as `failed`.
        """
        if build_target != SUPPORTED_BUILD_TARGET:
            _LOGGER.info(f"Nothing to do for build target `{build_target}`.")
            return False
        try:
            patch_project(
                destination, architecture, self.config.patch, self.diagnostic_sink
            )
            stage_files(destination, self.config.staging)
        except BaseException:
            self.state = PostprocessState.failed
            raise
        self.state = PostprocessState.complete
        _LOGGER.info(f"Post-processed Xcode project at `{destination}`.")
        return True


def on_postprocess_build(
    build_target: BuildTarget,
    destination: Path,
    architecture: IPhoneArchitecture,
    config: Optional[PostprocessConfig] = None,
    diagnostic_sink: Optional[IDiagnosticSink] = None,
) -> bool:
    return Postprocessor(config, diagnostic_sink).run(
        build_target, destination, architecture
    )
