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
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import List

from .build_platform import IPhoneArchitecture

_LOGGER: logging.Logger = logging.getLogger(__name__)


class IDiagnostic(metaclass=ABCMeta):
    @abstractmethod
    def render(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ArchitectureMismatchWarning(IDiagnostic):
    detected: IPhoneArchitecture
    expected: IPhoneArchitecture

    def render(self) -> str:
        return f"Current architecture is '{self.detected}', please use '{self.expected}' for release builds."


class IDiagnosticSink(metaclass=ABCMeta):
    @abstractmethod
    def emit(self, diagnostic: IDiagnostic) -> None:
        raise NotImplementedError


class LoggingDiagnosticSink(IDiagnosticSink):
    def emit(self, diagnostic: IDiagnostic) -> None:
        _LOGGER.warning(diagnostic.render())


class CollectingDiagnosticSink(IDiagnosticSink):
    """
    Keeps every emitted diagnostic so callers can inspect them after a run.
    """

    def __init__(self) -> None:
        self.diagnostics: List[IDiagnostic] = []

    def emit(self, diagnostic: IDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
