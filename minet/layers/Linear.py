import numpy as np

from .Layer import Layer, as_matrix
from .WeightInit import XavierInit
from ..helpers.errors import check_shape, require_cached


class Linear(Layer):
    def __init__(self, in_features, out_features, weight_init=None, rng=None):
        # weights: (in_features, out_features)
        # bias: (1, out_features)
        self.in_features = in_features
        self.out_features = out_features

        if weight_init is None:
            weight_init = XavierInit()
        if rng is None:
            rng = np.random.default_rng()
        self.weight_init = weight_init

        self.weights = np.asarray(
            weight_init((in_features, out_features), in_features, out_features, rng),
            dtype=np.float64,
        )
        self.bias = np.asarray(
            weight_init((1, out_features), in_features, out_features, rng),
            dtype=np.float64,
        )

        # grads (accumulated during backward, zeroed by the optimizer)
        self.dW = np.zeros_like(self.weights)
        self.db = np.zeros_like(self.bias)

        self.x = None

    def forward(self, x):
        # x shape: (batch, in_features)
        # return: (batch, out_features)
        x = check_shape(repr(self), as_matrix(x), (None, self.in_features))
        self.x = x.copy()  # cache for backward
        return x @ self.weights + self.bias

    def backward(self, grad_out):
        x = require_cached(repr(self), self.x)
        grad_out = as_matrix(grad_out, name="grad_out")
        check_shape(f"{self!r} grad_out", grad_out, (x.shape[0], self.out_features))
        self.dW += x.T @ grad_out  # (in, out)
        self.db += np.sum(grad_out, axis=0, keepdims=True)  # (1, out)
        return grad_out @ self.weights.T  # (B, in)

    def collect_weights(self):
        return [self.weights, self.bias]

    def collect_gradients(self):
        return [self.dW, self.db]

    def __repr__(self):
        return f"Linear({self.in_features}, {self.out_features})"
