import numpy as np


class XavierInit:
    """Glorot/Xavier uniform: U(-a, a) with a = sqrt(6 / (fan_in + fan_out))."""

    def __call__(self, shape, fan_in, fan_out, rng):
        a = np.sqrt(6.0 / (fan_in + fan_out))
        return rng.uniform(-a, a, size=shape)

    def __repr__(self):
        return "XavierInit"


class UniformInit:
    def __init__(self, low=-1.0, high=1.0):
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")
        self.low = float(low)
        self.high = float(high)

    def __call__(self, shape, fan_in, fan_out, rng):
        return rng.uniform(self.low, self.high, size=shape)

    def __repr__(self):
        return f"UniformInit({self.low}, {self.high})"


class ConstantInit:
    def __init__(self, value=0.0):
        self.value = float(value)

    def __call__(self, shape, fan_in, fan_out, rng):
        return np.full(shape, self.value, dtype=np.float64)

    def __repr__(self):
        return f"ConstantInit({self.value})"
