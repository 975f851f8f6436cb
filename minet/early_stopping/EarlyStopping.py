import numpy as np

_DIRECTIONS = {"max": 1.0, "min": -1.0}


class EarlyStopping:
    """
    Stops training once `monitor` has not improved by more than `min_delta`
    for `patience` consecutive epochs. Trainer uses it on dev accuracy.
    """

    def __init__(self, patience=5, min_delta=0.0, monitor="val_acc", mode="max",
                 restore_best_weights=False):
        if mode not in _DIRECTIONS:
            raise ValueError(f"mode must be 'min' or 'max', got {mode!r}")
        self.patience = patience
        self.min_delta = float(min_delta)
        self.monitor = monitor
        self.mode = mode
        self.restore_best_weights = restore_best_weights
        self._sign = _DIRECTIONS[mode]

        self.best = None
        self.best_epoch = -1
        self.wait = 0
        self.stopped = False
        self.stopped_epoch = None
        self._snapshot = None

    def improves(self, value):
        if self.best is None:
            return True
        return self._sign * (value - self.best) > self.min_delta

    def update(self, epoch, metrics, net=None):
        """Record one epoch. Returns True when training should stop."""
        value = metrics[self.monitor]
        if self.improves(value):
            self.best, self.best_epoch, self.wait = value, epoch, 0
            if self.restore_best_weights and net is not None:
                self._snapshot = [np.copy(p) for p in net.collect_weights()]
            return False

        self.wait += 1
        if self.wait < self.patience:
            return False

        self.stopped = True
        self.stopped_epoch = epoch
        if self._snapshot is not None and net is not None:
            # write back in place so optimizer references stay valid
            for p, saved in zip(net.collect_weights(), self._snapshot):
                p[...] = saved
        return True
