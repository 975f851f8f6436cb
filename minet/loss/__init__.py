from .Loss import Loss, one_hot
from .CrossEntropyLoss import CrossEntropyLoss
from .MeanSquaredErrorLoss import MeanSquaredErrorLoss

__all__ = ["Loss", "one_hot", "CrossEntropyLoss", "MeanSquaredErrorLoss"]
