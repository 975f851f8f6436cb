# helpers/errors.py


class MinetError(Exception):
    """Base class for every error raised by minet."""


class ShapeMismatchError(MinetError, ValueError):
    pass


class UninitializedStateError(MinetError, RuntimeError):
    pass


class IncompatibleLossError(MinetError, TypeError):
    pass


class MalformedDatasetError(MinetError, ValueError):
    def __init__(self, path, lineno, reason):
        self.path = str(path)
        self.lineno = lineno
        self.reason = reason
        super().__init__(f"{self.path}, line {lineno}: {reason}")


def check_shape(name, x, expected):
    # expected may hold None for "any size" along that axis
    if x.ndim != len(expected) or any(
        e is not None and s != e for s, e in zip(x.shape, expected)
    ):
        shown = tuple("*" if e is None else e for e in expected)
        raise ShapeMismatchError(
            f"{name}: expected shape {shown}, got {tuple(x.shape)}"
        )
    return x


def require_cached(owner, value, what="forward()"):
    if value is None:
        raise UninitializedStateError(
            f"{owner}: must call {what} before backward()"
        )
    return value
