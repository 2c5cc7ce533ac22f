class WallHeatTransferCoeffError(Exception):
    """Base class for all errors raised by wallhtc"""


class ConfigurationError(WallHeatTransferCoeffError, ValueError):
    """Invalid or incomplete function entry. Fatal for the function object."""


class MissingFieldError(WallHeatTransferCoeffError, LookupError):
    """A required input field is not available at execute time"""

    def __init__(self, name, available=()):
        self.name = name
        self.available = sorted(available)
        WallHeatTransferCoeffError.__init__(
            self,
            'Field {} not found. Available objects: {}'.format(name, self.available)
            )

    def __str__(self):
        return self.args[0]


class WriteOrderError(WallHeatTransferCoeffError, RuntimeError):
    """write() was called without a successful execute() in the same cycle"""
