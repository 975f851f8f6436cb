import numpy as np

from minet import (
    Linear,
    Sigmoid,
    Softmax,
    Sequential,
    UniformInit,
    CrossEntropyLoss,
    MeanSquaredErrorLoss,
    check_gradient,
)

X = np.array([
    [.1, .1, .1, .6, .1],
    [.5, .1, .2, .1, .1],
    [.1, .2, .2, .1, .4],
])


def regression_check(rng):
    Y = np.array([[2., 0.], [-0.1, 5.], [3., -1.2]])
    net = Sequential([Linear(5, 2, UniformInit(-1, 1), rng=rng)])
    loss = MeanSquaredErrorLoss()
    print(net)
    print(loss)
    return check_gradient(net, loss, X, Y, verbose=True)


def classification_check(rng):
    Y = np.array([[2.], [0.], [1.]])
    net = Sequential([
        Linear(5, 10, UniformInit(-1, 1), rng=rng),
        Sigmoid(),
        Linear(10, 20, UniformInit(-1, 1), rng=rng),
        Sigmoid(),
        Linear(20, 6, UniformInit(-1, 1), rng=rng),
        Softmax(),
    ])
    loss = CrossEntropyLoss()
    print(net)
    print(loss)
    return check_gradient(net, loss, X, Y, verbose=True)


if __name__ == "__main__":
    rng = np.random.default_rng(0)
    print("--- Test 1 ---")
    r1 = regression_check(rng)
    print()
    print("--- Test 2 ---")
    r2 = classification_check(rng)
    for r in (r1, r2):
        for m in r.mismatches:
            print(m)
