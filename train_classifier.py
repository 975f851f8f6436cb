# train_classifier.py
import argparse

import numpy as np

from minet import (
    Dataset,
    Linear,
    Sigmoid,
    Softmax,
    Sequential,
    XavierInit,
    CrossEntropyLoss,
    SGDOptimizer,
    Trainer,
    RunLogger,
)

# Hyperparameters
HIDDEN_DIMS = 1000
OUT_DIMS = 10
BATCH_SIZE = 1000
N_EPOCHS = 50
PATIENCE = 5
LEARNING_RATE = 1.0


def build_network(in_dims, rng, hidden_dims=HIDDEN_DIMS, out_dims=OUT_DIMS):
    return Sequential([
        Linear(in_dims, hidden_dims, XavierInit(), rng=rng),
        Sigmoid(),
        Linear(hidden_dims, out_dims, XavierInit(), rng=rng),
        Softmax(),
    ])


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Train a one-hidden-layer classifier with SGD.")
    p.add_argument("seed", type=int)
    p.add_argument("train_path")
    p.add_argument("dev_path")
    p.add_argument("test_path")
    p.add_argument("--runs-root", default=None, help="write history/checkpoints/plots under this directory")
    p.add_argument("--tag", default="classifier")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    rng = np.random.default_rng(args.seed)

    print("Loading data...")
    trainset = Dataset.load_txt(args.train_path)
    devset = Dataset.load_txt(args.dev_path)
    testset = Dataset.load_txt(args.test_path)
    print(f"train: {trainset.get_size()} | dev: {devset.get_size()} | test: {testset.get_size()} instances")

    print("\nCreating network...")
    net = build_network(trainset.get_input_dims(), rng, hidden_dims=HIDDEN_DIMS, out_dims=OUT_DIMS)
    loss = CrossEntropyLoss()
    sgd = SGDOptimizer(net, lr=LEARNING_RATE)
    print(net)
    print(loss)

    logger = RunLogger(root=args.runs_root, tag=args.tag) if args.runs_root else None
    trainer = Trainer(
        net, loss, sgd,
        batch_size=BATCH_SIZE, epochs=N_EPOCHS, patience=PATIENCE,
        rng=rng, verbose=1, logger=logger,
    )
    history = trainer.fit(trainset, devset)

    test_acc = trainer.evaluate(testset)
    print(f"accuracy on test set: {test_acc:.6f}")

    if logger is not None:
        logger.plot_all(history, loss_name=repr(loss))
        print(f"run files written to {logger.dir}")
    return test_acc


if __name__ == "__main__":
    main()
