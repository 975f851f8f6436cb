from .errors import (
    MinetError,
    ShapeMismatchError,
    UninitializedStateError,
    IncompatibleLossError,
    MalformedDatasetError,
)
from .logger import RunLogger
