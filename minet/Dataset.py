import numpy as np

from .helpers.errors import MalformedDatasetError, ShapeMismatchError

SEPARATOR = " ; "


class Dataset:
    """Paired inputs X (one row per instance) and targets Y with a mini-batch cursor.

    Text format::

        <num_instances> <x_dims> <y_dims>
        <x_dims floats separated by spaces> ; <y_dims floats separated by spaces>
        ...

    For classification y_dims is 1 and holds the class index.
    """

    def __init__(self, X, Y):
        X = np.array(X, dtype=np.float64)
        Y = np.array(Y, dtype=np.float64)
        if X.ndim != 2 or Y.ndim != 2:
            raise ShapeMismatchError(
                f"X and Y must be 2-D, got {X.shape} and {Y.shape}"
            )
        if X.shape[0] != Y.shape[0]:
            raise ShapeMismatchError(
                f"X has {X.shape[0]} rows but Y has {Y.shape[0]}"
            )
        self.X = X
        self.Y = Y
        self.curr_index = 0

    # ----- text I/O -----
    @classmethod
    def load_txt(cls, path):
        with open(path, "r") as f:
            lines = f.read().splitlines()

        if not lines:
            raise MalformedDatasetError(path, 1, "empty file, expected a header line")
        header = lines[0].split()
        if len(header) != 3:
            raise MalformedDatasetError(
                path, 1, f"header needs 3 integers '<size> <x_dims> <y_dims>', got {lines[0]!r}"
            )
        try:
            size, x_dims, y_dims = (int(t) for t in header)
        except ValueError:
            raise MalformedDatasetError(path, 1, f"non-integer header {lines[0]!r}") from None
        if size < 0 or x_dims < 1 or y_dims < 1:
            raise MalformedDatasetError(path, 1, f"invalid header values {lines[0]!r}")

        body = lines[1:]
        # tolerate trailing blank lines only
        while body and not body[-1].strip():
            body.pop()
        if len(body) < size:
            raise MalformedDatasetError(
                path, len(body) + 2, f"expected {size} instances, file ends after {len(body)}"
            )
        if len(body) > size:
            raise MalformedDatasetError(
                path, size + 2, f"header declares {size} instances but more lines follow"
            )

        X = np.empty((size, x_dims), dtype=np.float64)
        Y = np.empty((size, y_dims), dtype=np.float64)
        for i, line in enumerate(body):
            lineno = i + 2
            parts = line.split(SEPARATOR)
            if len(parts) != 2:
                raise MalformedDatasetError(
                    path, lineno, f"expected exactly one {SEPARATOR.strip()!r} separator"
                )
            X[i] = _parse_floats(parts[0], x_dims, path, lineno, "x")
            Y[i] = _parse_floats(parts[1], y_dims, path, lineno, "y")
        return cls(X, Y)

    def save_txt(self, path):
        with open(path, "w") as f:
            f.write(f"{self.get_size()} {self.get_input_dims()} {self.get_output_dims()}\n")
            for x, y in zip(self.X, self.Y):
                xs = " ".join(repr(float(v)) for v in x)
                ys = " ".join(repr(float(v)) for v in y)
                f.write(f"{xs}{SEPARATOR}{ys}\n")

    # ----- sizes -----
    def get_size(self):
        return self.X.shape[0]

    def get_input_dims(self):
        return self.X.shape[1]

    def get_output_dims(self):
        return self.Y.shape[1]

    def __len__(self):
        return self.get_size()

    # ----- iteration -----
    def reset(self):
        # must be called before each epoch to restart the mini-batch iteration
        self.curr_index = 0

    def shuffle(self, rng=None):
        # same permutation for X and Y keeps rows paired
        if rng is None or isinstance(rng, (int, np.integer)):
            rng = np.random.default_rng(rng)
        idx = rng.permutation(self.get_size())
        self.X[...] = self.X[idx]
        self.Y[...] = self.Y[idx]
        self.curr_index = 0

    def get_next_mini_batch(self, batch_size):
        """
        Returns (X_batch, Y_batch) of up to batch_size rows, or None once the
        cursor has reached the end (the cursor then goes back to 0).
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if self.curr_index >= self.get_size():
            self.curr_index = 0
            return None
        start = self.curr_index
        end = min(start + batch_size, self.get_size())
        self.curr_index = end
        return self.X[start:end].copy(), self.Y[start:end].copy()

    def iter_mini_batches(self, batch_size):
        while True:
            batch = self.get_next_mini_batch(batch_size)
            if batch is None:
                return
            yield batch

    def __repr__(self):
        return (
            f"Dataset(size={self.get_size()}, x_dims={self.get_input_dims()}, "
            f"y_dims={self.get_output_dims()})"
        )


def _parse_floats(text, dims, path, lineno, which):
    tokens = text.split()
    if len(tokens) != dims:
        raise MalformedDatasetError(
            path, lineno, f"expected {dims} {which} values, got {len(tokens)}"
        )
    try:
        return [float(t) for t in tokens]
    except ValueError as e:
        raise MalformedDatasetError(path, lineno, f"non-numeric {which} value ({e})") from None
