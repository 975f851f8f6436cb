from .Layer import Layer
from .Linear import Linear
from .Sigmoid import Sigmoid
from .TanH import TanH
from .ReLU import ReLU
from .Softmax import Softmax
from .Sequential import Sequential
from .WeightInit import XavierInit, UniformInit, ConstantInit

__all__ = [
    "Layer",
    "Linear",
    "Sigmoid",
    "TanH",
    "ReLU",
    "Softmax",
    "Sequential",
    "XavierInit",
    "UniformInit",
    "ConstantInit",
]
