from ..helpers.errors import ShapeMismatchError


class SGDOptimizer:
    def __init__(self, net, lr=1e-2):
        weights = net.collect_weights()
        grads = net.collect_gradients()
        if len(weights) != len(grads):
            raise ShapeMismatchError(
                f"{len(weights)} weight tensors but {len(grads)} gradient tensors"
            )
        for i, (p, g) in enumerate(zip(weights, grads)):
            if p.shape != g.shape:
                raise ShapeMismatchError(
                    f"parameter {i}: weight {p.shape} vs gradient {g.shape}"
                )
        self.params = [[p, g] for p, g in zip(weights, grads)]  # list of [p, g], by reference
        self.lr = lr

    def update_weights(self):
        for p, g in self.params:
            p -= self.lr * g

    def reset_gradients(self):
        for _, g in self.params:
            g[...] = 0.0
