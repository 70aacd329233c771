"""Logging and output-related CLI arguments."""


class LoggingGroup:
    """Logging and output configuration arguments."""

    name = "logging"

    @classmethod
    def add_arguments(cls, parser):
        """Add logging arguments to the parser."""
        group = parser.add_argument_group(cls.name)

        group.add_argument(
            "--silent",
            action="store_true",
            default=None,
            help="Suppress log output",
        )

        group.add_argument(
            "--debug",
            action="store_true",
            default=False,
            help="Print debug logs to the terminal",
        )
