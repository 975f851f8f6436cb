import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from minet import Dataset


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def write_txt(tmp_path):
    """Write raw text to a file under tmp_path and return its path."""

    def _write(text, name="data.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


def make_blobs(rng, n_per_class=50, centers=((2.0, 2.0), (-2.0, -2.0)), std=0.5):
    X, Y = [], []
    for label, c in enumerate(centers):
        X.append(rng.normal(loc=c, scale=std, size=(n_per_class, len(c))))
        Y.append(np.full((n_per_class, 1), float(label)))
    return np.vstack(X), np.vstack(Y)


@pytest.fixture
def blobs(rng):
    X, Y = make_blobs(rng)
    return Dataset(X, Y)
