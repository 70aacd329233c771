"""Exceptions raised by the build pipeline."""


class EtscError(Exception):
    """Base class for all etsc failures."""


class ConfigError(EtscError):
    """The user config file could not be loaded or holds invalid values."""


class TSConfigError(EtscError):
    """The TypeScript configuration could not be found or resolved."""


class BuildError(EtscError):
    """An external build tool failed."""

    def __init__(self, message, output=""):
        super().__init__(message)
        self.output = output

    def __str__(self):
        message = super().__str__()
        if self.output:
            return f"{message}\n{self.output.rstrip()}"
        return message
