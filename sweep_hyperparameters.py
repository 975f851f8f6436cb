# sweep_hyperparameters.py
import argparse
import csv
import itertools
import os

import numpy as np

from minet import (
    Dataset,
    Linear,
    ReLU,
    TanH,
    Softmax,
    Sequential,
    XavierInit,
    CrossEntropyLoss,
    MeanSquaredErrorLoss,
    SGDOptimizer,
    Trainer,
)

HIDDEN_DIMS = 1000
OUT_DIMS = 10
EVAL_BATCH_SIZE = 1000
N_EPOCHS = 50
PATIENCE = 5

ACTIVATIONS = [ReLU, TanH]
BATCH_SIZES = [500, 1000, 1500]
LEARNING_RATES = [0.25, 0.5, 0.75, 1.0]
LOSSES = [CrossEntropyLoss, MeanSquaredErrorLoss]


def build_network(in_dims, activation, rng, hidden_dims=HIDDEN_DIMS, out_dims=OUT_DIMS):
    return Sequential([
        Linear(in_dims, hidden_dims, XavierInit(), rng=rng),
        activation(),
        Linear(hidden_dims, out_dims, XavierInit(), rng=rng),
        Softmax(),
    ])


def run_trial(trainset, devset, testset, activation, batch_size, lr, loss_cls, rng,
              epochs=N_EPOCHS, patience=PATIENCE, hidden_dims=HIDDEN_DIMS, out_dims=OUT_DIMS):
    # every trial starts from freshly initialised weights
    net = build_network(trainset.get_input_dims(), activation, rng,
                        hidden_dims=hidden_dims, out_dims=out_dims)
    loss = loss_cls()
    trainer = Trainer(
        net, loss, SGDOptimizer(net, lr=lr),
        batch_size=batch_size, epochs=epochs, patience=patience,
        rng=rng, verbose=0,
    )
    trainer.fit(trainset, devset)
    trainer.batch_size = EVAL_BATCH_SIZE
    return trainer.evaluate(testset), repr(loss)


def sweep(trainset, devset, testset, rng, **trial_kwargs):
    results = []
    grid = itertools.product(ACTIVATIONS, BATCH_SIZES, LEARNING_RATES, LOSSES)
    for activation, batch_size, lr, loss_cls in grid:
        test_acc, loss_name = run_trial(
            trainset, devset, testset, activation, batch_size, lr, loss_cls, rng, **trial_kwargs
        )
        row = [activation.__name__, batch_size, lr, loss_name, test_acc]
        print(" ".join(str(v) for v in row))
        results.append(row)
    return results


def _save_results_csv(csv_path, rows):
    os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
    with open(csv_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["activation", "batch_size", "learning_rate", "loss", "test_acc"])
        w.writerows(rows)


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Grid search over activation, batch size, learning rate and loss.")
    p.add_argument("seed", type=int)
    p.add_argument("train_path")
    p.add_argument("dev_path")
    p.add_argument("test_path")
    p.add_argument("--out", default=None, help="optional CSV file for the results table")
    args = p.parse_args()

    rng = np.random.default_rng(args.seed)
    trainset = Dataset.load_txt(args.train_path)
    devset = Dataset.load_txt(args.dev_path)
    testset = Dataset.load_txt(args.test_path)

    rows = sweep(trainset, devset, testset, rng)
    if args.out:
        _save_results_csv(args.out, rows)
