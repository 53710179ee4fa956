"""
Tests for the model / penalty / algorithm strategies.

Validates gradient formulas per regression family, link functions and
classification rules, penalty gradients and proximal operators, and the
step-size schedules of each algorithm.
"""

import numpy as np
import pytest


class TestModelGradients:
    """Test loss gradients w.r.t. the linear predictor."""

    def test_l2(self) -> None:
        from onlinestats import L2Regression

        assert L2Regression().gradient(1.0, 3.0) == 2.0

    def test_l1(self) -> None:
        from onlinestats import L1Regression

        m = L1Regression()
        assert m.gradient(1.0, 3.0) == 1.0
        assert m.gradient(3.0, 1.0) == -1.0

    def test_logistic_and_poisson(self) -> None:
        from onlinestats import LogisticRegression, PoissonRegression

        assert LogisticRegression().gradient(1.0, 0.25) == -0.75
        assert PoissonRegression().gradient(2.0, 5.0) == 3.0

    def test_quantile(self) -> None:
        """1{y < yhat} - tau."""
        from onlinestats import QuantileRegression

        m = QuantileRegression(0.3)
        assert m.gradient(1.0, 2.0) == pytest.approx(0.7)
        assert m.gradient(2.0, 1.0) == pytest.approx(-0.3)

    def test_svm(self) -> None:
        """Hinge gradient is -y inside the margin, zero outside."""
        from onlinestats import SVMLike

        m = SVMLike()
        assert m.gradient(1.0, 0.5) == -1.0
        assert m.gradient(1.0, 2.0) == 0.0
        assert m.gradient(-1.0, -0.5) == 1.0

    def test_vectorized(self) -> None:
        from onlinestats import L2Regression, HuberRegression

        y = np.array([0.0, 0.0, 0.0])
        yhat = np.array([0.5, 3.0, -3.0])
        np.testing.assert_allclose(L2Regression().gradient(y, yhat), yhat)
        np.testing.assert_allclose(HuberRegression(1.0).gradient(y, yhat), [0.5, 1.0, -1.0])


class TestHuber:
    """Test Huber gradient regimes."""

    def test_matches_l2_inside(self) -> None:
        """|y - yhat| <= delta gives the L2 gradient."""
        from onlinestats import HuberRegression, L2Regression

        h, l2 = HuberRegression(2.0), L2Regression()
        for y, yhat in [(0.0, 0.5), (1.0, -0.9), (3.0, 1.0), (0.0, -2.0)]:
            assert h.gradient(y, yhat) == l2.gradient(y, yhat)

    def test_clipped_outside(self) -> None:
        """Beyond delta the gradient is delta * sign(yhat - y)."""
        from onlinestats import HuberRegression

        h = HuberRegression(2.0)
        assert h.gradient(0.0, 5.0) == 2.0
        assert h.gradient(0.0, -5.0) == -2.0

    def test_continuous_at_boundary(self) -> None:
        from onlinestats import HuberRegression

        h = HuberRegression(1.0)
        assert h.gradient(0.0, 1.0) == 1.0
        assert h.gradient(0.0, 1.0 + 1e-9) == pytest.approx(1.0)
        assert h.gradient(0.0, 1.0 - 1e-9) == pytest.approx(1.0)

    @pytest.mark.parametrize("delta", [0.0, -1.0])
    def test_invalid_delta(self, delta: float) -> None:
        from onlinestats import HuberRegression, ConfigurationError

        with pytest.raises(ConfigurationError):
            HuberRegression(delta)


class TestQuantileValidation:
    """Test QuantileRegression construction."""

    @pytest.mark.parametrize("tau", [0.0, 1.0, -0.5, 1.2])
    def test_invalid_tau(self, tau: float) -> None:
        from onlinestats import QuantileRegression, ConfigurationError

        with pytest.raises(ConfigurationError):
            QuantileRegression(tau)

    def test_default_is_median(self) -> None:
        from onlinestats import QuantileRegression

        assert QuantileRegression().tau == 0.5
        assert "0.5" in repr(QuantileRegression())


class TestPrediction:
    """Test links and classification rules."""

    def test_identity_link(self) -> None:
        from onlinestats import L2Regression

        beta = np.array([0.5, 0.5])
        m = L2Regression()
        assert m.predict(np.array([1.0, 2.0]), beta, 1.0) == 2.5

        X = np.array([[1.0, 2.0], [0.0, 0.0], [2.0, 2.0]])
        np.testing.assert_allclose(m.predict(X, beta, 1.0), [2.5, 1.0, 3.0])

    def test_logistic_link(self) -> None:
        from onlinestats import LogisticRegression

        m = LogisticRegression()
        beta = np.array([1.0])
        assert m.predict(np.array([0.0]), beta, 0.0) == 0.5
        assert m.predict(np.array([50.0]), beta, 0.0) == pytest.approx(1.0)

    def test_poisson_link(self) -> None:
        from onlinestats import PoissonRegression

        m = PoissonRegression()
        assert m.predict(np.array([1.0]), np.array([np.log(3.0)]), 0.0) == pytest.approx(3.0)

    def test_poisson_overflow_warns(self) -> None:
        from onlinestats import PoissonRegression

        with pytest.warns(UserWarning, match="overflowed"):
            PoissonRegression().predict(np.array([1.0]), np.array([1000.0]), 0.0)

    def test_logistic_classify(self) -> None:
        """Label 1 when probability exceeds 0.5."""
        from onlinestats import LogisticRegression

        m = LogisticRegression()
        beta = np.array([1.0])
        assert m.classify(np.array([0.0]), beta, 0.0) == 0.0
        assert m.classify(np.array([0.1]), beta, 0.0) == 1.0
        X = np.array([[-1.0], [1.0]])
        np.testing.assert_array_equal(m.classify(X, beta, 0.0), [0.0, 1.0])

    def test_svm_classify(self) -> None:
        """Label 1 when the linear predictor exceeds 0."""
        from onlinestats import SVMLike

        m = SVMLike()
        beta = np.array([1.0])
        assert m.classify(np.array([-0.1]), beta, 0.0) == 0.0
        assert m.classify(np.array([0.1]), beta, 0.0) == 1.0

    def test_classify_undefined_for_regression(self) -> None:
        from onlinestats import L2Regression

        with pytest.raises(NotImplementedError):
            L2Regression().classify(np.array([1.0]), np.array([1.0]), 0.0)


class TestPenalties:
    """Test penalty values, gradients and prox operators."""

    def test_no_penalty(self) -> None:
        from onlinestats import NoPenalty

        beta = np.array([1.0, -2.0])
        p = NoPenalty()
        assert p.value(beta) == 0.0
        np.testing.assert_array_equal(p.gradient(beta), [0.0, 0.0])
        np.testing.assert_array_equal(p.prox(beta, 0.5), beta)

    def test_l2(self) -> None:
        from onlinestats import L2Penalty

        beta = np.array([1.0, -2.0])
        p = L2Penalty(0.5)
        assert p.value(beta) == pytest.approx(1.25)
        np.testing.assert_allclose(p.gradient(beta), [0.5, -1.0])
        np.testing.assert_allclose(p.prox(beta, 2.0), beta / 2.0)

    def test_l1_soft_threshold(self) -> None:
        """Lasso prox shrinks toward zero and zeroes small entries."""
        from onlinestats import L1Penalty

        p = L1Penalty(1.0)
        np.testing.assert_allclose(p.prox(np.array([3.0, -0.5, 1.0, -4.0]), 1.0), [2.0, 0.0, 0.0, -3.0])
        np.testing.assert_allclose(p.gradient(np.array([2.0, -3.0, 0.0])), [1.0, -1.0, 0.0])

    def test_elastic_net_endpoints(self) -> None:
        """alpha = 1 is lasso, alpha = 0 is ridge."""
        from onlinestats import ElasticNetPenalty, L1Penalty, L2Penalty

        beta = np.array([1.5, -0.2, 0.0])
        np.testing.assert_allclose(
            ElasticNetPenalty(0.3, 1.0).prox(beta, 1.0), L1Penalty(0.3).prox(beta, 1.0)
        )
        np.testing.assert_allclose(
            ElasticNetPenalty(0.3, 0.0).gradient(beta), L2Penalty(0.3).gradient(beta)
        )
        assert ElasticNetPenalty(0.3, 0.0).value(beta) == pytest.approx(L2Penalty(0.3).value(beta))

    def test_invalid(self) -> None:
        from onlinestats import L1Penalty, L2Penalty, ElasticNetPenalty, ConfigurationError

        with pytest.raises(ConfigurationError):
            L1Penalty(-1.0)
        with pytest.raises(ConfigurationError):
            L2Penalty(-0.1)
        with pytest.raises(ConfigurationError):
            ElasticNetPenalty(0.1, 1.5)


class TestAlgorithms:
    """Test step-size schedules."""

    def test_sgd_schedule(self) -> None:
        """Step is -eta / t^r * g with t counting calls."""
        from onlinestats import SGD

        a = SGD(eta=1.0, r=0.5)
        beta = np.zeros(1)
        np.testing.assert_allclose(a.step(np.array([2.0]), beta), [-2.0])
        np.testing.assert_allclose(a.step(np.array([2.0]), beta), [-2.0 / np.sqrt(2.0)])
        assert a.t == 2
        assert a.rate == pytest.approx(1.0 / np.sqrt(2.0))

    def test_momentum(self) -> None:
        from onlinestats import Momentum

        a = Momentum(eta=1.0, r=1.0, alpha=0.5)
        beta = np.zeros(1)
        first = a.step(np.array([1.0]), beta)
        second = a.step(np.array([1.0]), beta)

        np.testing.assert_allclose(first, [-1.0])
        # v = 0.5 * 1 + 0.5 * 1
        np.testing.assert_allclose(second, [-1.0])

        a.reset()
        assert a.t == 0
        assert a.velocity is None

    def test_adagrad(self) -> None:
        """Per-coordinate scaling by accumulated squared gradients."""
        from onlinestats import AdaGrad

        a = AdaGrad(eta=1.0)
        beta = np.zeros(2)
        first = a.step(np.array([2.0, 0.5]), beta)
        np.testing.assert_allclose(first, [-1.0, -1.0], rtol=1e-6)

        second = a.step(np.array([2.0, 0.5]), beta)
        np.testing.assert_allclose(second, [-1.0 / np.sqrt(2.0)] * 2, rtol=1e-6)

    def test_prox_flag(self) -> None:
        from onlinestats import SGD, ProxSGD

        assert SGD.proximal is False
        assert ProxSGD().proximal is True

    def test_invalid_parameters(self) -> None:
        from onlinestats import SGD, Momentum, AdaGrad, ConfigurationError

        with pytest.raises(ConfigurationError):
            SGD(eta=0.0)
        with pytest.raises(ConfigurationError):
            SGD(r=1.5)
        with pytest.raises(ConfigurationError):
            Momentum(alpha=1.0)
        with pytest.raises(ConfigurationError):
            AdaGrad(eps=0.0)


class TestStrategyBases:
    """Test that incomplete strategies fail at construction."""

    def test_bases_not_instantiable(self) -> None:
        from onlinestats.glm import ModelDefinition, Penalty, Algorithm

        for base in (ModelDefinition, Penalty, Algorithm):
            with pytest.raises(TypeError):
                base()

    def test_identity_link_needs_gradient(self) -> None:
        from onlinestats.glm.models import IdentityLinkModel

        with pytest.raises(TypeError):
            IdentityLinkModel()

    def test_custom_model(self) -> None:
        """A subclass supplying link and gradient plugs into StochasticModel."""
        from onlinestats.glm import ModelDefinition, StochasticModel, SGD

        class Scaled(ModelDefinition):
            def link(self, eta):
                return 2.0 * eta

            def gradient(self, y, yhat):
                return yhat - y

        o = StochasticModel(1, intercept=False, model=Scaled(), algorithm=SGD(eta=1.0))
        o.update(np.array([1.0]), 4.0)
        np.testing.assert_allclose(o.beta, [4.0])
        assert o.predict(np.array([1.0])) == 8.0
