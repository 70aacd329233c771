"""Build-related CLI arguments."""

import os

from etsc.config import DEFAULT_CONFIG_FILE


class BuildGroup:
    """Config file and output directory arguments."""

    name = "build"

    @classmethod
    def add_arguments(cls, parser):
        """Add build arguments to the parser."""
        group = parser.add_argument_group(cls.name)

        group.add_argument(
            "--config",
            type=str,
            default=DEFAULT_CONFIG_FILE,
            help="Path to config file",
        )

        # None means "not given", so config file values are not overridden
        group.add_argument(
            "--clean",
            action="store_true",
            default=None,
            help="Clean output directory before build",
        )

    @classmethod
    def process_args(cls, args):
        """Resolve the config path against the working directory."""
        args.config = os.path.abspath(os.path.join(os.getcwd(), args.config))
        return args
