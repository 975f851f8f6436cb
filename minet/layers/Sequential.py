import numpy as np

from .Layer import Layer
from ..helpers.errors import ShapeMismatchError


class Sequential(Layer):
    """Fixed, ordered composition of layers.

    Weights and gradients are collected depth-first in construction order
    (Linear contributes weight then bias), which is the order the optimizer
    and the gradient checker rely on.
    """

    def __init__(self, layers):
        layers = tuple(layers)
        if not layers:
            raise ValueError("Sequential needs at least one layer")
        for L in layers:
            if not isinstance(L, Layer):
                raise TypeError(f"not a Layer: {L!r}")
        self._layers = layers

    @property
    def layers(self):
        return self._layers

    def forward(self, x):
        for layer in self._layers:
            x = layer.forward(x)
        return x

    def backward(self, grad):
        for L in reversed(self._layers):
            grad = L.backward(grad)
        return grad

    def backward_fused(self, grad_logits):
        # the last child consumes the fused gradient, the rest run normally
        grad = self._layers[-1].backward_fused(grad_logits)
        for L in reversed(self._layers[:-1]):
            grad = L.backward(grad)
        return grad

    def collect_weights(self):
        ws = []
        for L in self._layers:
            ws.extend(L.collect_weights())
        return ws

    def collect_gradients(self):
        gs = []
        for L in self._layers:
            gs.extend(L.collect_gradients())
        return gs

    # model I/O
    def save_weights(self, path):
        # tensors stored as p0, p1, ... in collect_weights() order
        arrays = {f"p{i}": p for i, p in enumerate(self.collect_weights())}
        np.savez(path, **arrays)

    def load_weights(self, path):
        with np.load(path) as data:
            weights = self.collect_weights()
            if len(data.files) != len(weights):
                raise ShapeMismatchError(
                    f"checkpoint holds {len(data.files)} tensors, network has {len(weights)}"
                )
            for i, p in enumerate(weights):
                stored = data[f"p{i}"]
                if stored.shape != p.shape:
                    raise ShapeMismatchError(
                        f"p{i}: checkpoint shape {stored.shape} != network shape {p.shape}"
                    )
                p[...] = stored

    def __len__(self):
        return len(self._layers)

    def __repr__(self):
        inner = ",\n".join(f"  {L!r}" for L in self._layers)
        return f"Sequential(\n{inner}\n)"
