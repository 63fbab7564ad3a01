# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is dual-licensed under either the MIT license found in the
# LICENSE-MIT file in the root directory of this source tree or the Apache
# License, Version 2.0 found in the LICENSE-APACHE file in the root directory
# of this source tree. You may select, at your option, one of the
# above-listed licenses.

# pyre-strict

import logging
import pathlib
import sys
from typing import List, Optional

from tap import Tap

from .build_platform import BuildTarget, IPhoneArchitecture
from .errors import PostprocessError
from .postprocess import on_postprocess_build
from .postprocess_config import load_config


class Arguments(Tap):
    """
    Tool which prepares a Unity-exported Xcode project for CocoaPods and copies supporting files into it.
    """

    # pyre-fixme[13]: Attribute `destination` is never initialized.
    destination: pathlib.Path
    build_target: BuildTarget = BuildTarget.ios
    architecture: IPhoneArchitecture = IPhoneArchitecture.ARM64
    config: Optional[pathlib.Path] = None
    template_root: Optional[pathlib.Path] = None
    log_level: str = "INFO"

    def configure(self) -> None:
        """
        Configure the arguments.
        """
        self.add_argument(
            "--destination",
            metavar="</path/to/exported/xcode/project>",
            type=pathlib.Path,
            required=True,
            help="Root of the Xcode project exported by Unity.",
        )
        self.add_argument(
            "--build-target",
            metavar="<build target>",
            type=BuildTarget,
            choices=[e.value for e in BuildTarget],
            required=False,
            default=BuildTarget.ios,
            help="Unity build target the project was exported for. Anything but `ios` is a no-op.",
        )
        self.add_argument(
            "--architecture",
            metavar="<ARMv7|ARM64|Universal>",
            type=IPhoneArchitecture.from_string,
            required=False,
            default=IPhoneArchitecture.ARM64,
            help="Architecture selected in the iOS player settings, by name or by its integer value.",
        )
        self.add_argument(
            "--config",
            metavar="<config.json>",
            type=pathlib.Path,
            required=False,
            default=None,
            help="JSON file overriding the default project and staging settings.",
        )
        self.add_argument(
            "--template-root",
            metavar="</path/to/XCodeFiles>",
            type=pathlib.Path,
            required=False,
            default=None,
            help="Directory holding the `Pod`, `AppController` and `Strings` template folders. Overrides the config.",
        )
        self.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            required=False,
            default="INFO",
            help="Configure the logging level.",
        )


# Add emoji to beginning of actionable error message so it stands out more.
def decorate_error_message(message: str) -> str:
    return " ".join(["❗️", message])


def _main(argv: Optional[List[str]] = None) -> int:
    args = Arguments().parse_args(argv)
    logging.basicConfig(level=args.log_level)

    try:
        config = load_config(args.config)
        if args.template_root:
            config = config.with_template_root(args.template_root)
        on_postprocess_build(
            build_target=args.build_target,
            destination=args.destination,
            architecture=args.architecture,
            config=config,
        )
    except PostprocessError as e:
        print(decorate_error_message(str(e)), file=sys.stderr)
        return 1
    return 0


def main() -> None:
    sys.exit(_main())


if __name__ == "__main__":
    main()
