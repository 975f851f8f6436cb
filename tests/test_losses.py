"""
Tests for the loss functions: values, gradients, target formats and
the softmax/cross-entropy pairing.
"""
import numpy as np
import pytest

from minet import (
    CrossEntropyLoss,
    MeanSquaredErrorLoss,
    Linear,
    Sigmoid,
    Softmax,
    Sequential,
    one_hot,
    ShapeMismatchError,
    UninitializedStateError,
    IncompatibleLossError,
)


def softmax_rows(z):
    e = np.exp(z - z.max(axis=1, keepdims=True))
    return e / e.sum(axis=1, keepdims=True)


# ────────────────────────────────────────────────────────────────────
# one_hot
# ────────────────────────────────────────────────────────────────────
class TestOneHot:
    def test_encodes_indices(self):
        np.testing.assert_array_equal(
            one_hot(np.array([[2.0], [0.0]]), 3), [[0, 0, 1], [1, 0, 0]]
        )

    @pytest.mark.parametrize("labels", [[3.0], [-1.0], [0.5]])
    def test_rejects_bad_indices(self, labels):
        with pytest.raises(ShapeMismatchError):
            one_hot(np.array(labels), 3)


# ────────────────────────────────────────────────────────────────────
# Cross-entropy
# ────────────────────────────────────────────────────────────────────
class TestCrossEntropyLoss:
    def test_known_value_with_indices(self):
        ce = CrossEntropyLoss()
        Y_hat = np.array([[0.7, 0.2, 0.1], [0.1, 0.8, 0.1]])
        Y = np.array([[0.0], [1.0]])
        expected = -(np.log(0.7) + np.log(0.8)) / 2
        assert ce.forward(Y, Y_hat) == pytest.approx(expected)

    def test_indices_and_one_hot_agree(self):
        Y_hat = np.array([[0.7, 0.2, 0.1], [0.1, 0.8, 0.1]])
        idx = np.array([[0.0], [1.0]])
        oh = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        a, b = CrossEntropyLoss(), CrossEntropyLoss()
        assert a.forward(idx, Y_hat) == pytest.approx(b.forward(oh, Y_hat))
        np.testing.assert_allclose(a.backward_logits(), b.backward_logits())

    def test_flat_label_vector_accepted(self):
        ce = CrossEntropyLoss()
        loss = ce.forward(np.array([2.0, 0.0]), np.array([[0.2, 0.3, 0.5], [0.6, 0.2, 0.2]]))
        assert loss == pytest.approx(-(np.log(0.5) + np.log(0.6)) / 2)

    def test_zero_probability_gives_finite_loss(self):
        ce = CrossEntropyLoss()
        loss = ce.forward(np.array([[1.0]]), np.array([[1.0, 0.0]]))
        assert np.isfinite(loss)
        assert loss == pytest.approx(-np.log(1e-12))

    def test_backward_logits_is_fused_gradient(self):
        ce = CrossEntropyLoss()
        Y_hat = np.array([[0.7, 0.2, 0.1], [0.1, 0.8, 0.1]])
        ce.forward(np.array([[0.0], [2.0]]), Y_hat)
        expected = (Y_hat - np.array([[1, 0, 0], [0, 0, 1]])) / 2
        np.testing.assert_allclose(ce.backward_logits(), expected)

    def test_fused_gradient_matches_logit_derivative(self, rng):
        """(Y_hat - Y)/m is dL/dlogits when Y_hat = softmax(logits)."""
        Z = rng.standard_normal((4, 3))
        Y = np.array([[0.0], [2.0], [1.0], [1.0]])
        ce = CrossEntropyLoss()
        ce.forward(Y, softmax_rows(Z))
        analytic = ce.backward_logits()
        eps = 1e-6
        numeric = np.zeros_like(Z)
        for idx in np.ndindex(Z.shape):
            zp, zn = Z.copy(), Z.copy()
            zp[idx] += eps
            zn[idx] -= eps
            numeric[idx] = (
                CrossEntropyLoss().forward(Y, softmax_rows(zp))
                - CrossEntropyLoss().forward(Y, softmax_rows(zn))
            ) / (2 * eps)
        np.testing.assert_allclose(analytic, numeric, atol=1e-7)

    def test_backpropagate_requires_trailing_softmax(self, rng):
        net = Sequential([Linear(3, 2, rng=rng), Sigmoid()])
        ce = CrossEntropyLoss()
        ce.forward(np.array([[1.0]]), net.forward(np.ones((1, 3))))
        with pytest.raises(IncompatibleLossError):
            ce.backpropagate(net)

    def test_backpropagate_through_softmax_net(self, rng):
        lin = Linear(3, 2, rng=rng)
        net = Sequential([lin, Softmax()])
        ce = CrossEntropyLoss()
        ce.forward(np.array([[1.0]]), net.forward(np.ones((1, 3))))
        dX = ce.backpropagate(net)
        np.testing.assert_allclose(dX, ce.backward_logits() @ lin.weights.T)

    def test_backward_is_gradient_wrt_probabilities(self):
        ce = CrossEntropyLoss()
        Y_hat = np.array([[0.7, 0.2, 0.1], [0.1, 0.8, 0.1]])
        ce.forward(np.array([[0.0], [2.0]]), Y_hat)
        expected = -np.array([[1 / 0.7, 0, 0], [0, 0, 1 / 0.1]]) / 2
        np.testing.assert_allclose(ce.backward(), expected)

    def test_backward_matches_numeric(self, rng):
        Y = np.array([[0.0], [2.0], [1.0]])
        Y_hat = softmax_rows(rng.standard_normal((3, 3)))
        ce = CrossEntropyLoss()
        ce.forward(Y, Y_hat)
        analytic = ce.backward()
        eps = 1e-7
        numeric = np.zeros_like(Y_hat)
        for idx in np.ndindex(Y_hat.shape):
            yp, yn = Y_hat.copy(), Y_hat.copy()
            yp[idx] += eps
            yn[idx] -= eps
            numeric[idx] = (
                CrossEntropyLoss().forward(Y, yp) - CrossEntropyLoss().forward(Y, yn)
            ) / (2 * eps)
        np.testing.assert_allclose(analytic, numeric, atol=1e-5)

    def test_plain_backward_through_softmax_matches_backpropagate(self, rng):
        """net.backward(ce.backward()) and ce.backpropagate(net) agree."""
        lin = Linear(3, 4, rng=rng)
        net = Sequential([lin, Softmax()])
        X = rng.standard_normal((2, 3))
        Y = np.array([[1.0], [3.0]])
        ce = CrossEntropyLoss()
        ce.forward(Y, net.forward(X))

        lin.dW[...] = 0.0
        lin.db[...] = 0.0
        plain = net.backward(ce.backward())
        dW_plain, db_plain = lin.dW.copy(), lin.db.copy()

        lin.dW[...] = 0.0
        lin.db[...] = 0.0
        fused = ce.backpropagate(net)
        np.testing.assert_allclose(plain, fused, atol=1e-10)
        np.testing.assert_allclose(dW_plain, lin.dW, atol=1e-10)
        np.testing.assert_allclose(db_plain, lin.db, atol=1e-10)

    def test_single_column_prediction_rejected(self):
        # class 0 against a lone column would otherwise score a loss of 0
        with pytest.raises(ShapeMismatchError):
            CrossEntropyLoss().forward(np.array([[0.0], [0.0]]), np.array([[0.3], [0.9]]))

    def test_backward_before_forward(self):
        with pytest.raises(UninitializedStateError):
            CrossEntropyLoss().backward()

    def test_batch_size_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            CrossEntropyLoss().forward(np.array([[0.0], [1.0]]), np.array([[0.5, 0.5]]))

    def test_class_index_out_of_range(self):
        with pytest.raises(ShapeMismatchError):
            CrossEntropyLoss().forward(np.array([[5.0]]), np.array([[0.5, 0.5]]))

    def test_repr(self):
        assert repr(CrossEntropyLoss()) == "CrossEntropy"


# ────────────────────────────────────────────────────────────────────
# Mean squared error
# ────────────────────────────────────────────────────────────────────
class TestMeanSquaredErrorLoss:
    def test_zero_loss(self):
        Y = np.array([[1.0], [2.0], [3.0]])
        assert MeanSquaredErrorLoss().forward(Y, Y) == pytest.approx(0.0)

    def test_mean_over_all_entries(self):
        Y = np.array([[0.0, 0.0], [0.0, 0.0]])
        Y_hat = np.array([[1.0, 2.0], [3.0, 4.0]])
        assert MeanSquaredErrorLoss().forward(Y, Y_hat) == pytest.approx(30.0 / 4)

    def test_backward_formula(self):
        mse = MeanSquaredErrorLoss()
        Y = np.array([[1.0, 0.0], [0.0, 1.0]])
        Y_hat = np.array([[0.5, 0.5], [0.0, 2.0]])
        mse.forward(Y, Y_hat)
        np.testing.assert_allclose(mse.backward(), 2 * (Y_hat - Y) / 4)

    def test_backward_matches_numeric(self, rng):
        mse = MeanSquaredErrorLoss()
        Y_hat = rng.standard_normal((4, 2))
        Y = rng.standard_normal((4, 2))
        mse.forward(Y, Y_hat)
        analytic = mse.backward()

        eps = 1e-7
        numeric = np.zeros_like(Y_hat)
        for idx in np.ndindex(Y_hat.shape):
            orig = Y_hat[idx]
            Y_hat[idx] = orig + eps
            loss_p = MeanSquaredErrorLoss().forward(Y, Y_hat)
            Y_hat[idx] = orig - eps
            loss_m = MeanSquaredErrorLoss().forward(Y, Y_hat)
            Y_hat[idx] = orig
            numeric[idx] = (loss_p - loss_m) / (2 * eps)
        np.testing.assert_allclose(analytic, numeric, atol=1e-6)

    def test_class_indices_expand_to_one_hot(self):
        mse = MeanSquaredErrorLoss()
        Y_hat = np.array([[0.5, 0.5, 0.0]])
        loss = mse.forward(np.array([[1.0]]), Y_hat)
        assert loss == pytest.approx((0.25 + 0.25 + 0.0) / 3)

    def test_cached_prediction_is_a_copy(self):
        mse = MeanSquaredErrorLoss()
        Y_hat = np.array([[1.0]])
        mse.forward(np.array([[0.0]]), Y_hat)
        Y_hat[0, 0] = 50.0
        np.testing.assert_allclose(mse.backward(), [[2.0]])

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            MeanSquaredErrorLoss().forward(np.zeros((2, 2)), np.zeros((2, 3)))

    def test_backward_before_forward(self):
        with pytest.raises(UninitializedStateError):
            MeanSquaredErrorLoss().backward()

    def test_repr(self):
        assert repr(MeanSquaredErrorLoss()) == "MeanSquaredError"
