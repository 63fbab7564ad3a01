# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dataclasses_json import config, dataclass_json

from .build_platform import IPhoneArchitecture
from .errors import InvalidConfigError

INHERITED = "$(inherited)"
ARCHS_STANDARD = "$(ARCHS_STANDARD)"


def _decode_architecture(
    value: Union[int, str, IPhoneArchitecture],
) -> IPhoneArchitecture:
    if isinstance(value, IPhoneArchitecture):
        return value
    return IPhoneArchitecture.from_string(str(value))


@dataclass_json
@dataclass
class PatchConfig:
    # Relative to the exported Xcode project root
    project_path: str = "Unity-iPhone.xcodeproj/project.pbxproj"
    target_name: str = "Unity-iPhone"
    # CocoaPods needs these to inherit from the xcconfig it generates
    inherited_properties: List[str] = field(
        default_factory=lambda: [
            "HEADER_SEARCH_PATHS",
            "FRAMEWORK_SEARCH_PATHS",
            "OTHER_CFLAGS",
            "OTHER_LDFLAGS",
        ]
    )
    inherited_value: str = INHERITED
    archs_property: str = "ARCHS"
    archs_value: str = ARCHS_STANDARD
    # Accepts the name or the integer value of the architecture
    required_architecture: IPhoneArchitecture = field(
        default=IPhoneArchitecture.ARM64,
        metadata=config(decoder=_decode_architecture),
    )


@dataclass_json
@dataclass
class StagingConfig:
    template_root: str = "./XCodeFiles"
    pod_folder: str = "Pod"
    pod_file_names: List[str] = field(
        default_factory=lambda: ["Podfile", "pods.command", "open_pods.command"]
    )
    app_controller_folder: str = "AppController"
    app_controller_file_names: List[str] = field(
        default_factory=lambda: ["UnityAppController.mm"]
    )
    app_controller_destination: str = "Classes"
    strings_folder: str = "Strings"
    localized_strings_folder_names: List[str] = field(
        default_factory=lambda: ["en.lproj", "es.lproj", "pt.lproj"]
    )

    @property
    def template_root_path(self) -> Path:
        return Path(self.template_root)

    @property
    def pod_file_paths(self) -> List[Path]:
        return [
            self.template_root_path / self.pod_folder / name
            for name in self.pod_file_names
        ]

    @property
    def app_controller_file_paths(self) -> List[Path]:
        return [
            self.template_root_path / self.app_controller_folder / name
            for name in self.app_controller_file_names
        ]

    @property
    def strings_folder_path(self) -> Path:
        return self.template_root_path / self.strings_folder


@dataclass_json
@dataclass
class PostprocessConfig:
    patch: PatchConfig = field(default_factory=PatchConfig)
    staging: StagingConfig = field(default_factory=StagingConfig)

    def with_template_root(self, template_root: Path) -> "PostprocessConfig":
        config = copy.deepcopy(self)
        config.staging.template_root = str(template_root)
        return config


def load_config(path: Optional[Path]) -> PostprocessConfig:
    """
    Reads a JSON config, falling back to defaults for any missing key.

    A relative `template_root` is resolved against the directory holding the
    config file.
    """
    if path is None:
        return PostprocessConfig()
    with open(path) as config_file:
        try:
            # pyre-ignore[16]: `from_dict` is dynamically provided by `dataclass_json`
            config = PostprocessConfig.from_dict(json.load(config_file))
        except ValueError as e:
            raise InvalidConfigError(path, str(e)) from e
    template_root = Path(config.staging.template_root)
    if not template_root.is_absolute():
        config.staging.template_root = str(path.parent / template_root)
    return config
