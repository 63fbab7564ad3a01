# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .errors import PathNotFoundError
from .postprocess_config import StagingConfig

_LOGGER: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileManifestEntry:
    source: Path
    destination: Path


def app_controller_manifest(
    destination: Path, config: StagingConfig
) -> List[FileManifestEntry]:
    return [
        FileManifestEntry(
            source=path,
            destination=destination / config.app_controller_destination / path.name,
        )
        for path in config.app_controller_file_paths
    ]


def pod_manifest(destination: Path, config: StagingConfig) -> List[FileManifestEntry]:
    return [
        FileManifestEntry(source=path, destination=destination / path.name)
        for path in config.pod_file_paths
    ]


def localized_strings_manifest(
    destination: Path, config: StagingConfig
) -> List[FileManifestEntry]:
    return [
        FileManifestEntry(
            source=config.strings_folder_path / folder_name,
            destination=destination / folder_name,
        )
        for folder_name in config.localized_strings_folder_names
    ]


def copy_and_replace_file(source: Path, destination: Path) -> None:
    if not source.is_file():
        raise PathNotFoundError(source)
    if destination.is_dir() and not destination.is_symlink():
        shutil.rmtree(destination)
    elif destination.exists() or destination.is_symlink():
        destination.unlink()
    destination.parent.mkdir(parents=True, exist_ok=True)
    # Keeps the executable bit of the `.command` scripts
    shutil.copy2(source, destination)
    _LOGGER.debug(f"Copied `{source}` to `{destination}`.")


def copy_directory(source: Path, destination: Path) -> None:
    """
    Copies `source` into `destination`, merging with whatever is already there.

    Files directly inside `source` overwrite same-named files. Subdirectories
    replace same-named destination subdirectories wholesale, see
    `copy_and_replace_directory`.
    """
    if not source.is_dir():
        raise PathNotFoundError(source)
    if destination.is_symlink() or (
        destination.exists() and not destination.is_dir()
    ):
        destination.unlink()
    destination.mkdir(parents=True, exist_ok=True)
    _copy_directory_contents(source, destination)


def copy_and_replace_directory(source: Path, destination: Path) -> None:
    if not source.is_dir():
        raise PathNotFoundError(source)
    if destination.is_dir() and not destination.is_symlink():
        shutil.rmtree(destination)
    elif destination.exists() or destination.is_symlink():
        destination.unlink()
    destination.mkdir(parents=True)
    _copy_directory_contents(source, destination)


def _copy_directory_contents(source: Path, destination: Path) -> None:
    entries = sorted(source.iterdir())
    for entry in entries:
        if not entry.is_dir():
            copy_and_replace_file(entry, destination / entry.name)
    for entry in entries:
        if entry.is_dir():
            copy_and_replace_directory(entry, destination / entry.name)


def stage_files(destination: Path, config: StagingConfig) -> List[FileManifestEntry]:
    """
    Copies the template files into the exported Xcode project at `destination`.

    Stops at the first missing source; entries staged before it stay in place.
    """
    staged = []

    _LOGGER.info("Staging app controller files.")
    for entry in app_controller_manifest(destination, config):
        copy_and_replace_file(entry.source, entry.destination)
        staged.append(entry)

    _LOGGER.info("Staging CocoaPods files.")
    for entry in pod_manifest(destination, config):
        copy_and_replace_file(entry.source, entry.destination)
        staged.append(entry)

    _LOGGER.info("Staging localized strings.")
    for entry in localized_strings_manifest(destination, config):
        copy_directory(entry.source, entry.destination)
        staged.append(entry)

    return staged
