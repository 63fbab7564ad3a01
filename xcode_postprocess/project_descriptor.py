# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List

from openstep_parser import OpenStepDecoder
from pbxproj import PBXGenericObject, XcodeProject

from .errors import PathNotFoundError, TargetNotFoundError

_LOGGER: logging.Logger = logging.getLogger(__name__)


def _as_values(value: Any) -> List[str]:
    # Build settings hold either a single string or a list of strings.
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


class ProjectDescriptor:
    """
    Build settings of an Xcode project viewed as (target, property) -> list of values.

    Every edit applies to all build configurations of the target. Appends never
    deduplicate, so appending the same value on two runs stores it twice.
    """

    def __init__(self, project: XcodeProject) -> None:
        self._project = project

    @classmethod
    def read_from_string(cls, text: str, path: Path) -> ProjectDescriptor:
        tree = OpenStepDecoder.ParseFromString(text)
        return cls(XcodeProject(tree, str(path)))

    @classmethod
    def load(cls, path: Path) -> ProjectDescriptor:
        if not path.is_file():
            raise PathNotFoundError(path)
        return cls.read_from_string(path.read_text(encoding="utf-8"), path)

    def write_to_string(self) -> str:
        return repr(self._project) + "\n"

    def save(self, path: Path) -> None:
        fd, temp_path = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as temp_file:
                temp_file.write(self.write_to_string())
            if path.exists():
                shutil.copymode(path, temp_path)
            os.replace(temp_path, path)
        except BaseException:
            Path(temp_path).unlink(missing_ok=True)
            raise
        _LOGGER.debug(f"Wrote project descriptor to `{path}`.")

    def target_guid_by_name(self, name: str) -> str:
        objects = self._project["objects"]
        root_object = objects[self._project["rootObject"]]
        for target_guid in root_object["targets"]:
            if objects[target_guid]["name"] == name:
                return str(target_guid)
        raise TargetNotFoundError(name)

    def configuration_names(self, target_guid: str) -> List[str]:
        return [
            str(configuration["name"])
            for configuration in self._build_configurations(target_guid)
        ]

    def get_build_property(
        self, target_guid: str, name: str, configuration_name: str
    ) -> List[str]:
        for configuration in self._build_configurations(target_guid):
            if configuration["name"] != configuration_name:
                continue
            if "buildSettings" not in configuration:
                return []
            build_settings = configuration["buildSettings"]
            if name not in build_settings:
                return []
            return _as_values(build_settings[name])
        raise RuntimeError(
            f"No build configuration named `{configuration_name}` on target `{target_guid}`."
        )

    def add_build_property(self, target_guid: str, name: str, value: str) -> None:
        for configuration in self._build_configurations(target_guid):
            build_settings = self._build_settings(configuration)
            current = (
                _as_values(build_settings[name]) if name in build_settings else []
            )
            build_settings[name] = current + [value]

    def set_build_property(self, target_guid: str, name: str, value: str) -> None:
        for configuration in self._build_configurations(target_guid):
            self._build_settings(configuration)[name] = value

    def _build_configurations(self, target_guid: str) -> List[Any]:
        objects = self._project["objects"]
        configuration_list = objects[objects[target_guid]["buildConfigurationList"]]
        return [objects[guid] for guid in configuration_list["buildConfigurations"]]

    def _build_settings(self, configuration: Any) -> Any:
        if "buildSettings" not in configuration:
            configuration["buildSettings"] = PBXGenericObject(configuration)
        return configuration["buildSettings"]
