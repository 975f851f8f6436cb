"""
Numerical verification of the hand-written backward passes.

Every input scalar and every parameter scalar is perturbed by +eps and -eps,
the loss is recomputed with a fresh forward pass, and the centred difference

    (L(theta + eps) - L(theta - eps)) / (2 * eps)

is compared against the analytic gradient with an absolute tolerance.
This costs two forward passes per scalar: use it on small tensors only.
"""
import numpy as np


class GradientMismatch:
    def __init__(self, kind, tensor_index, index, analytic, numeric):
        self.kind = kind  # "input" or "weights"
        self.tensor_index = tensor_index  # position in collect_weights(), None for input
        self.index = index
        self.analytic = float(analytic)
        self.numeric = float(numeric)

    @property
    def diff(self):
        return abs(self.analytic - self.numeric)

    def __repr__(self):
        where = self.kind if self.tensor_index is None else f"{self.kind}[{self.tensor_index}]"
        return (
            f"GradientMismatch({where} at {self.index}: "
            f"analytic={self.analytic:.6g}, numeric={self.numeric:.6g})"
        )


class GradientCheckResult:
    def __init__(self, input_ok, weights_ok, mismatches):
        self.input_ok = input_ok
        self.weights_ok = weights_ok
        self.mismatches = mismatches

    @property
    def passed(self):
        return self.input_ok and self.weights_ok

    def __bool__(self):
        return self.passed

    def __repr__(self):
        return (
            f"GradientCheckResult(input_ok={self.input_ok}, "
            f"weights_ok={self.weights_ok}, mismatches={len(self.mismatches)})"
        )


def check_gradient(net, loss, X, Y, eps=1e-7, tol=1e-6, verbose=False):
    """
    net: a Layer (usually Sequential)
    loss: a Loss
    X: (batch, input_dims) mini-batch
    Y: targets for X, in whatever form `loss` accepts
    """
    X = np.array(X, dtype=np.float64)
    Y = np.asarray(Y, dtype=np.float64)

    weights = net.collect_weights()
    grads = net.collect_gradients()
    # backward accumulates, so start from clean buffers
    for g in grads:
        g[...] = 0.0

    # forward and backward to get the analytic gradients wrt X and the weights
    loss.forward(Y, net.forward(X))
    dX = np.array(loss.backpropagate(net), dtype=np.float64)
    analytic = [np.copy(g) for g in grads]

    def loss_at(x):
        return loss.forward(Y, net.forward(x))

    mismatches = []

    # dL/dX: a row stops at its first mismatch, the remaining rows still run
    input_ok = True
    for i in range(X.shape[0]):
        for j in range(X.shape[1]):
            xp = X.copy()
            xp[i, j] += eps
            xn = X.copy()
            xn[i, j] -= eps
            numeric = (loss_at(xp) - loss_at(xn)) / (2 * eps)
            if abs(dX[i, j] - numeric) > tol:
                input_ok = False
                mismatches.append(GradientMismatch("input", None, (i, j), dX[i, j], numeric))
                break

    # dL/dW: each tensor stops at its first mismatch
    weights_ok = True
    for t, (w, g) in enumerate(zip(weights, analytic)):
        for idx in np.ndindex(w.shape):
            original = w[idx]
            w[idx] = original + eps
            p_loss = loss_at(X)
            w[idx] = original - eps
            n_loss = loss_at(X)
            w[idx] = original

            numeric = (p_loss - n_loss) / (2 * eps)
            if abs(g[idx] - numeric) > tol:
                weights_ok = False
                mismatches.append(GradientMismatch("weights", t, idx, g[idx], numeric))
                break

    if verbose:
        print("correct backward for input" if input_ok else "incorrect backward for input")
        print("correct backward for weights" if weights_ok else "incorrect backward for weights")

    return GradientCheckResult(input_ok, weights_ok, mismatches)
