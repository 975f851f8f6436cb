import numpy as np

from ..helpers.errors import ShapeMismatchError


class Loss:
    def forward(self, Y, Y_hat):
        # Return scalar loss; cache whatever backward() needs
        raise NotImplementedError

    def backward(self):
        # Return grad of the loss wrt the network output
        raise NotImplementedError

    def backpropagate(self, net):
        # Push the loss gradient through net; return grad wrt net's input
        return net.backward(self.backward())

    def __repr__(self):
        return type(self).__name__


def one_hot(labels, num_classes):
    """
    labels: (batch,) or (batch, 1) holding class indices stored as floats
    returns: (batch, num_classes)
    """
    labels = np.asarray(labels, dtype=np.float64).reshape(-1)
    idx = labels.astype(np.int64)
    if np.any(idx != labels) or np.any(idx < 0) or np.any(idx >= num_classes):
        raise ShapeMismatchError(
            f"class indices must be integers in [0, {num_classes}), got {labels.tolist()}"
        )
    oh = np.zeros((labels.size, num_classes), dtype=np.float64)
    oh[np.arange(labels.size), idx] = 1.0
    return oh


def as_targets(Y, Y_hat):
    """
    Bring Y to the shape of Y_hat. A single target column against a wider
    prediction is read as class indices and one-hot encoded.
    """
    Y = np.asarray(Y, dtype=np.float64)
    if Y.ndim == 1:
        Y = Y.reshape(-1, 1)
    if Y_hat.ndim != 2 or Y.ndim != 2 or Y.shape[0] != Y_hat.shape[0]:
        raise ShapeMismatchError(
            f"targets {Y.shape} and predictions {Y_hat.shape} disagree on batch size"
        )
    if Y.shape[1] == 1 and Y_hat.shape[1] > 1:
        return one_hot(Y, Y_hat.shape[1])
    if Y.shape != Y_hat.shape:
        raise ShapeMismatchError(
            f"targets {Y.shape} do not match predictions {Y_hat.shape}"
        )
    return Y.copy()
