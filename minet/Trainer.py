import time
import numpy as np

from .early_stopping.EarlyStopping import EarlyStopping


class Trainer:
    def __init__(
        self,
        net,
        loss,
        optimizer,
        batch_size=1000,
        epochs=50,
        patience=5,
        rng=None,
        verbose=1,
        logger=None,
    ):
        self.net = net
        self.loss = loss
        self.optimizer = optimizer
        self.batch_size = batch_size
        self.epochs = epochs
        self.patience = patience
        if rng is None or isinstance(rng, (int, np.integer)):
            rng = np.random.default_rng(rng)
        self.rng = rng
        self.verbose = verbose
        self.logger = logger

    def train_epoch(self, train_data):
        # always shuffle the data between epochs
        train_data.shuffle(self.rng)
        total_loss = 0.0
        for xb, yb in train_data.iter_mini_batches(self.batch_size):
            # always reset the gradients before performing backward
            self.optimizer.reset_gradients()
            y_hat = self.net.forward(xb)
            total_loss += self.loss.forward(yb, y_hat)
            self.loss.backpropagate(self.net)
            self.optimizer.update_weights()
        return total_loss

    def fit(self, train_data, dev_data=None):
        history = {"loss": []}
        stopper = None
        if dev_data is not None:
            history["val_acc"] = []
            if self.patience is not None:
                stopper = EarlyStopping(patience=self.patience, monitor="val_acc", mode="max")

        if self.verbose > 0:
            print(f"Starting training for {self.epochs} epochs...")
        for ep in range(self.epochs):
            t0 = time.time()
            train_loss = self.train_epoch(train_data)
            history["loss"].append(train_loss)
            metrics = {"loss": train_loss}

            # validation
            if dev_data is not None:
                val_acc = self.evaluate(dev_data)
                history["val_acc"].append(val_acc)
                metrics["val_acc"] = val_acc

            # logging (console)
            if self.verbose > 0:
                line = f"Epoch {ep}/{self.epochs} - loss: {train_loss:.6f}"
                if dev_data is not None:
                    line += f" - val_acc: {val_acc:.6f}"
                print(line)

            # logging (files + checkpoints)
            if self.logger is not None:
                self.logger.log_epoch(ep, time_s=time.time() - t0, **metrics)
                self.logger.save_checkpoint(self.net, best=False)
                if dev_data is not None and val_acc >= max(history["val_acc"]):
                    self.logger.save_checkpoint(self.net, best=True)

            # early stopping
            if stopper is not None and stopper.update(ep, metrics, self.net):
                if self.verbose > 0:
                    print(
                        f"Early stopping at epoch {ep:02d}. "
                        f"Best {stopper.monitor}={stopper.best:.4f} at epoch {stopper.best_epoch:02d}."
                    )
                break

        if self.verbose > 0:
            print("training is finished")
        if self.logger is not None:
            self.logger.save_json()
        return history

    def predict(self, X):
        return np.argmax(self.net.forward(X), axis=1)

    def evaluate(self, data):
        """Fraction of rows whose row-argmax matches the class index in Y."""
        data.reset()  # move pointer to beginning of dataset
        if data.get_size() == 0:
            return 0.0
        correct = 0
        for xb, yb in data.iter_mini_batches(self.batch_size):
            pred = self.predict(xb)
            correct += int(np.sum(pred == yb[:, 0]))
        return correct / data.get_size()
