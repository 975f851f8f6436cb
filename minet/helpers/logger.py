# helpers/logger.py
import csv, json, datetime, pathlib

import matplotlib.pyplot as plt


class RunLogger:
    def __init__(self, root="runs", tag="run"):
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        self.root = pathlib.Path(root)
        self.tag = tag
        self.dir = self.root / f"{tag}_{ts}"
        self.dir.mkdir(parents=True, exist_ok=True)
        self.csv_path = self.dir / "history.csv"
        self.json_path = self.dir / "history.json"
        self.best_ckpt = self.dir / "checkpoint_best.npz"
        self.last_ckpt = self.dir / "checkpoint_last.npz"
        self.metrics = []  # list of dicts per epoch
        self._csv_header_written = False

    # ---------- logging ----------
    def log_epoch(self, epoch, **kwargs):
        row = {"epoch": int(epoch), **{k: float(v) for k, v in kwargs.items()}}
        self.metrics.append(row)
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(row.keys()))
            if not self._csv_header_written:
                writer.writeheader()
                self._csv_header_written = True
            writer.writerow(row)

    def save_json(self):
        with open(self.json_path, "w") as f:
            json.dump(self.metrics, f, indent=2)
        return str(self.json_path)

    def save_checkpoint(self, net, best=False):
        path = self.best_ckpt if best else self.last_ckpt
        net.save_weights(path)
        return str(path)

    # ---------- plotting ----------
    def _plots_dir(self, subdir):
        out = self.dir / subdir
        out.mkdir(parents=True, exist_ok=True)
        return out

    def plot_loss(self, history, loss_name="Loss", subdir="plots"):
        """
        Saves the training loss curve as loss_curve_<tag>.png.
        history: {'loss': [...], ...}
        """
        train = history.get("loss", [])
        if len(train) == 0:
            return None
        outdir = self._plots_dir(subdir)
        path = outdir / f"loss_curve_{self.tag}.png"
        plt.figure()
        plt.plot(train, label="train loss")
        plt.xlabel("Epoch")
        plt.ylabel(f"{loss_name} (summed over mini-batches)")
        plt.title(f"Loss vs Epochs ({self.tag})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(path, dpi=160)
        plt.close()
        return str(path)

    def plot_val_metrics(self, history, subdir="plots"):
        """
        Saves validation accuracy curve as val_metrics_<tag>.png if 'val_acc' is present.
        """
        val_acc = history.get("val_acc", [])
        if len(val_acc) == 0:
            return None
        outdir = self._plots_dir(subdir)
        path = outdir / f"val_metrics_{self.tag}.png"
        plt.figure()
        plt.plot(val_acc, label="val accuracy")
        plt.xlabel("Epoch")
        plt.ylabel("Accuracy")
        plt.title(f"Validation Accuracy vs Epochs ({self.tag})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(path, dpi=160)
        plt.close()
        return str(path)

    def plot_all(self, history, loss_name="Loss", subdir="plots"):
        return [
            p
            for p in (
                self.plot_loss(history, loss_name=loss_name, subdir=subdir),
                self.plot_val_metrics(history, subdir=subdir),
            )
            if p is not None
        ]
