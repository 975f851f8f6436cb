import numpy as np

from ..helpers.errors import IncompatibleLossError, ShapeMismatchError


class Layer:
    # Subclasses override as needed
    def forward(self, x):
        raise NotImplementedError

    def backward(self, grad_out):
        # Return grad wrt input
        raise NotImplementedError

    def backward_fused(self, grad_logits):
        # Only a trailing Softmax may receive the fused softmax+CE gradient
        raise IncompatibleLossError(
            f"{self!r} cannot receive a fused softmax/cross-entropy gradient; "
            "CrossEntropy requires the network to end with Softmax"
        )

    def collect_weights(self):
        # Return list of parameter ndarrays (e.g., [W, b])
        return []

    def collect_gradients(self):
        # Return list of gradient ndarrays matching collect_weights()
        return []

    def __repr__(self):
        return type(self).__name__


def as_matrix(x, name="input"):
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 2:
        raise ShapeMismatchError(
            f"{name}: expected a 2-D (batch, dims) array, got shape {x.shape}"
        )
    return x
