import numpy as np

from .Loss import Loss, as_targets
from ..helpers.errors import ShapeMismatchError, require_cached


class CrossEntropyLoss(Loss):
    def __init__(self, eps=1e-12):
        self.eps = eps
        # cache from forward
        self.probs = None
        self.m = None
        self.Y = None

    def forward(self, Y, Y_hat):
        """
        Y: (batch, 1) class indices, or (batch, num_classes) one-hot rows
        Y_hat: (batch, num_classes) -- softmax probabilities, num_classes >= 2
        returns: mean over rows of -log(Y_hat[row, Y[row]])
        """
        Y_hat = np.asarray(Y_hat, dtype=np.float64)
        if Y_hat.ndim == 2 and Y_hat.shape[1] < 2:
            # a single column would read class indices as probabilities
            raise ShapeMismatchError(
                f"CrossEntropy needs at least 2 class columns, got predictions {Y_hat.shape}"
            )
        Y = as_targets(Y, Y_hat)

        self.m = Y_hat.shape[0]
        self.Y = Y
        self.probs = Y_hat.copy()

        # clamp so a zero probability gives a large, finite loss
        log_probs = np.log(np.clip(Y_hat, self.eps, 1.0))
        return float(-np.sum(Y * log_probs) / self.m)

    def backward(self):
        """
        dL/dY_hat = -Y / (clip(probs) * m), zero where the clamp is active.
        Through Softmax.backward this reduces to (probs - Y)/m.
        """
        probs = require_cached(repr(self), self.probs)
        inside = (probs >= self.eps) & (probs <= 1.0)
        return np.where(inside, -self.Y / np.clip(probs, self.eps, 1.0), 0.0) / self.m

    def backward_logits(self):
        """
        dL/dlogits = (probs - Y)/m
        Fused softmax+CE gradient, i.e. the gradient wrt the input of the
        trailing Softmax, not wrt its output.
        """
        probs = require_cached(repr(self), self.probs)
        return (probs - self.Y) / self.m

    def backpropagate(self, net):
        return net.backward_fused(self.backward_logits())

    def __repr__(self):
        return "CrossEntropy"
