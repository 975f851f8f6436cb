import numpy as np

from .Layer import Layer, as_matrix
from ..helpers.errors import check_shape, require_cached


class Softmax(Layer):
    def __init__(self):
        self.y = None

    def forward(self, x):
        # x shape: (batch, num_classes)
        # return: (batch, num_classes), each row sums to 1
        x = as_matrix(x)
        exp_x = np.exp(x - np.max(x, axis=1, keepdims=True))
        y = exp_x / np.sum(exp_x, axis=1, keepdims=True)
        self.y = y.copy()
        return y

    def backward(self, grad_out):
        """
        Row-wise Jacobian-vector product of softmax:
        dX[i] = Y[i] * (gY[i] - <gY[i], Y[i]>)
        """
        y = require_cached(repr(self), self.y)
        grad_out = check_shape(f"{self!r} grad_out", as_matrix(grad_out, "grad_out"), y.shape)
        dot = np.sum(grad_out * y, axis=1, keepdims=True)  # (B, 1)
        return y * (grad_out - dot)

    def backward_fused(self, grad_logits):
        # The loss already folded the softmax Jacobian in: pass through.
        y = require_cached(repr(self), self.y)
        grad_logits = as_matrix(grad_logits, "grad_logits")
        return check_shape(f"{self!r} grad_logits", grad_logits, y.shape).copy()
