# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

import importlib.resources
import shutil
import tempfile
import unittest
from pathlib import Path

from .build_platform import BuildTarget, IPhoneArchitecture
from .diagnostics import ArchitectureMismatchWarning, CollectingDiagnosticSink
from .errors import PathNotFoundError, TargetNotFoundError
from .postprocess import on_postprocess_build, Postprocessor, PostprocessState
from .postprocess_config import PostprocessConfig
from .project_descriptor import ProjectDescriptor


def _snapshot(root: Path):
    return {
        str(path.relative_to(root)): path.read_bytes() if path.is_file() else None
        for path in sorted(root.rglob("*"))
    }


class TestPostprocess(unittest.TestCase):
    maxDiff = None

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        temp_path = Path(self._temp_dir.name)
        fixture = importlib.resources.files(__package__) / "test_resources"

        self.template_root = temp_path / "XCodeFiles"
        with importlib.resources.as_file(fixture / "XCodeFiles") as fixture_path:
            shutil.copytree(fixture_path, self.template_root)

        self.destination = temp_path / "build" / "out"
        self.project_path = (
            self.destination / "Unity-iPhone.xcodeproj" / "project.pbxproj"
        )
        self.project_path.parent.mkdir(parents=True)
        self.project_path.write_bytes((fixture / "project.pbxproj").read_bytes())
        (self.destination / "Classes").mkdir()

        self.config = PostprocessConfig().with_template_root(self.template_root)

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_exported_project_is_patched_and_staged(self):
        postprocessor = Postprocessor(self.config, CollectingDiagnosticSink())
        self.assertEqual(postprocessor.state, PostprocessState.not_run)

        self.assertTrue(
            postprocessor.run(
                BuildTarget.ios, self.destination, IPhoneArchitecture.ARM64
            )
        )

        self.assertEqual(postprocessor.state, PostprocessState.complete)
        for relative_path, template_path in [
            ("Podfile", "Pod/Podfile"),
            ("pods.command", "Pod/pods.command"),
            ("open_pods.command", "Pod/open_pods.command"),
            ("Classes/UnityAppController.mm", "AppController/UnityAppController.mm"),
            ("en.lproj/InfoPlist.strings", "Strings/en.lproj/InfoPlist.strings"),
            ("es.lproj/InfoPlist.strings", "Strings/es.lproj/InfoPlist.strings"),
            ("pt.lproj/InfoPlist.strings", "Strings/pt.lproj/InfoPlist.strings"),
        ]:
            self.assertEqual(
                (self.destination / relative_path).read_bytes(),
                (self.template_root / template_path).read_bytes(),
            )
        descriptor = ProjectDescriptor.load(self.project_path)
        target = descriptor.target_guid_by_name("Unity-iPhone")
        self.assertEqual(
            descriptor.get_build_property(target, "OTHER_CFLAGS", "Release"),
            ["$(inherited)"],
        )
        self.assertEqual(
            descriptor.get_build_property(target, "ARCHS", "Release"),
            ["$(ARCHS_STANDARD)"],
        )

    def test_other_build_targets_are_a_no_op(self):
        before = _snapshot(self.destination)
        for build_target in BuildTarget:
            if build_target == BuildTarget.ios:
                continue
            postprocessor = Postprocessor(self.config)
            self.assertFalse(
                postprocessor.run(
                    build_target, self.destination, IPhoneArchitecture.ARM64
                )
            )
            self.assertEqual(postprocessor.state, PostprocessState.not_run)
        self.assertEqual(_snapshot(self.destination), before)

    def test_architecture_warning_reaches_sink(self):
        sink = CollectingDiagnosticSink()
        self.assertTrue(
            on_postprocess_build(
                BuildTarget.ios,
                self.destination,
                IPhoneArchitecture.ARMv7,
                config=self.config,
                diagnostic_sink=sink,
            )
        )
        self.assertEqual(
            sink.diagnostics,
            [
                ArchitectureMismatchWarning(
                    detected=IPhoneArchitecture.ARMv7,
                    expected=IPhoneArchitecture.ARM64,
                )
            ],
        )
        self.assertTrue((self.destination / "Podfile").exists())

    def test_missing_target_fails_before_staging(self):
        self.config.patch.target_name = "Unity-iPhone Tests"
        postprocessor = Postprocessor(self.config, CollectingDiagnosticSink())
        with self.assertRaises(TargetNotFoundError):
            postprocessor.run(
                BuildTarget.ios, self.destination, IPhoneArchitecture.ARM64
            )
        self.assertEqual(postprocessor.state, PostprocessState.failed)
        self.assertFalse((self.destination / "Podfile").exists())

    def test_staging_failure_keeps_patched_project(self):
        shutil.rmtree(self.template_root / "Strings" / "pt.lproj")
        postprocessor = Postprocessor(self.config, CollectingDiagnosticSink())
        with self.assertRaises(PathNotFoundError):
            postprocessor.run(
                BuildTarget.ios, self.destination, IPhoneArchitecture.ARM64
            )
        self.assertEqual(postprocessor.state, PostprocessState.failed)
        descriptor = ProjectDescriptor.load(self.project_path)
        target = descriptor.target_guid_by_name("Unity-iPhone")
        self.assertEqual(
            descriptor.get_build_property(target, "OTHER_LDFLAGS", "Release"),
            ["$(inherited)"],
        )
        self.assertTrue((self.destination / "es.lproj").is_dir())
