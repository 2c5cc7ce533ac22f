from wallhtc.config import Configuration
from wallhtc.exceptions import (
    ConfigurationError,
    MissingFieldError,
    WallHeatTransferCoeffError,
    WriteOrderError,
)
from wallhtc.functionobject import WallHeatTransferCoeff
from wallhtc.kernel import FIELD_NAME, heat_transfer_coeff
from wallhtc.patches import resolve

__version__ = '1.0'
