# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import logging
from pathlib import Path

from .build_platform import IPhoneArchitecture
from .diagnostics import ArchitectureMismatchWarning, IDiagnosticSink
from .postprocess_config import PatchConfig
from .project_descriptor import ProjectDescriptor

_LOGGER: logging.Logger = logging.getLogger(__name__)


def project_descriptor_path(destination: Path, config: PatchConfig) -> Path:
    return destination / config.project_path


def patch_project(
    destination: Path,
    architecture: IPhoneArchitecture,
    config: PatchConfig,
    diagnostic_sink: IDiagnosticSink,
) -> ProjectDescriptor:
    project_path = project_descriptor_path(destination, config)
    _LOGGER.info(f"Patching `{project_path}`.")
    descriptor = ProjectDescriptor.load(project_path)
    target_guid = descriptor.target_guid_by_name(config.target_name)

    # CocoaPods support
    for property_name in config.inherited_properties:
        descriptor.add_build_property(
            target_guid, property_name, config.inherited_value
        )

    if architecture == config.required_architecture:
        descriptor.set_build_property(
            target_guid, config.archs_property, config.archs_value
        )
    else:
        diagnostic_sink.emit(
            ArchitectureMismatchWarning(
                detected=architecture, expected=config.required_architecture
            )
        )

    descriptor.save(project_path)
    return descriptor
