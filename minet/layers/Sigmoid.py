import numpy as np

from .Layer import Layer, as_matrix
from ..helpers.errors import check_shape, require_cached


class Sigmoid(Layer):
    def __init__(self):
        self.y = None

    def forward(self, x):
        x = as_matrix(x)
        # split by sign so exp never overflows
        y = np.empty_like(x)
        pos = x >= 0
        y[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
        ex = np.exp(x[~pos])
        y[~pos] = ex / (1.0 + ex)
        self.y = y.copy()
        return y

    def backward(self, grad_out):
        y = require_cached(repr(self), self.y)
        grad_out = check_shape(f"{self!r} grad_out", as_matrix(grad_out, "grad_out"), y.shape)
        return grad_out * y * (1.0 - y)
