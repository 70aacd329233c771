"""etsc CLI: argument parsing and logging setup."""

from etsc.config import ArgsConfig

from .core import CustomHelpFormatter, configure_logging, create_base_parser
from .groups import add_all_argument_groups, process_all_arguments


def create_parser():
    """Create a parser with every argument group registered."""
    parser = create_base_parser()
    add_all_argument_groups(parser)
    return parser


def parse_args(argv=None) -> ArgsConfig:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list without the program name (defaults to sys.argv)

    Returns:
        ArgsConfig: Parsed values, with the config path made absolute
    """
    parser = create_parser()
    args = process_all_arguments(parser.parse_args(argv))
    return ArgsConfig(
        config=args.config,
        clean=args.clean,
        silent=args.silent,
        debug=args.debug,
    )


__all__ = [
    "CustomHelpFormatter",
    "configure_logging",
    "create_parser",
    "parse_args",
]
