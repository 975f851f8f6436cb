from .layers import (
    Layer,
    Linear,
    Sigmoid,
    TanH,
    ReLU,
    Softmax,
    Sequential,
    XavierInit,
    UniformInit,
    ConstantInit,
)
from .loss import Loss, CrossEntropyLoss, MeanSquaredErrorLoss, one_hot
from .optimizer import SGDOptimizer
from .early_stopping import EarlyStopping
from .Dataset import Dataset
from .GradientChecker import check_gradient, GradientCheckResult, GradientMismatch
from .Trainer import Trainer
from .helpers.errors import (
    MinetError,
    ShapeMismatchError,
    UninitializedStateError,
    IncompatibleLossError,
    MalformedDatasetError,
)
from .helpers.logger import RunLogger

__version__ = "0.1.0"
