"""
Tests for Series orchestration.

Validates the fit overloads (single value, sequence, gamma overrides,
minibatches), the lockstep invariant across stats, batch equivalence, and
error handling before mutation.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def sample() -> np.ndarray:
    rng = np.random.default_rng(42)
    return rng.normal(loc=3.0, scale=2.0, size=500)


class TestConstruction:
    """Test Series construction."""

    def test_requires_stats(self) -> None:
        """A Series with no stats is a configuration error."""
        from onlinestats import Series, ConfigurationError

        with pytest.raises(ConfigurationError):
            Series()

    def test_default_weight(self) -> None:
        """EqualWeight is the default schedule."""
        from onlinestats import Series, Mean, EqualWeight

        s = Series(Mean())
        assert isinstance(s.weight, EqualWeight)
        assert s.nobs == 0
        assert len(s) == 1

    def test_weight_is_copied(self) -> None:
        """Fitting a Series never advances the caller's Weight object."""
        from onlinestats import Series, Mean, EqualWeight

        w = EqualWeight()
        a = Series(Mean(), weight=w)
        b = Series(Mean(), weight=w)
        a.update_batch([1.0, 2.0, 3.0])

        assert w.nobs == 0
        assert a.weight.nobs == 3
        assert b.weight.nobs == 0

    def test_stats_are_fixed(self) -> None:
        """The stat tuple cannot be reassigned."""
        from onlinestats import Series, Mean

        s = Series(Mean())
        assert isinstance(s.stats, tuple)
        with pytest.raises(AttributeError):
            s.stats = (Mean(), Mean())


class TestSingleUpdates:
    """Test one-observation fits."""

    def test_running_mean_equals_arithmetic_mean(self, sample: np.ndarray) -> None:
        """EqualWeight fitted one at a time reproduces the mean."""
        from onlinestats import Series, Mean, fit

        s = Series(Mean())
        for x in sample:
            fit(s, x)

        assert s.value()[0] == pytest.approx(sample.mean(), rel=1e-12)
        assert s.nobs == len(sample)

    def test_gamma_override(self) -> None:
        """An override replaces gamma but the counter still advances."""
        from onlinestats import Series, Mean

        s = Series(Mean())
        s.update(10.0, gamma=1.0)
        assert s.value() == (10.0,)
        assert s.weight.nobs == 1

        # Next gamma from the Weight is 1/2
        s.update(4.0)
        assert s.value() == (7.0,)
        assert s.weight.nobs == 2

    @pytest.mark.parametrize("gamma", [0.0, -0.5, 1.5, float('nan')])
    def test_gamma_out_of_range(self, gamma: float) -> None:
        """Invalid overrides raise before anything changes."""
        from onlinestats import Series, Mean, RangeError

        s = Series(Mean())
        with pytest.raises(RangeError):
            s.update(1.0, gamma=gamma)
        assert s.nobs == 0
        assert s.weight.nobs == 0
        assert s.stats[0].n == 0


class TestRejectedObservations:
    """A rejected observation leaves the Series exactly as it was."""

    def test_sequence_passed_to_update(self) -> None:
        from onlinestats import Series, Mean, Variance

        s = Series(Mean(), Variance())
        s.update(3.0)
        with pytest.raises(ValueError):
            s.update([1.0, 2.0])

        assert s.nobs == 1
        assert s.weight.nobs == 1
        assert [stat.n for stat in s.stats] == [1, 1]
        assert s.value() == (3.0, 0.0)

    def test_non_numeric_observation(self) -> None:
        from onlinestats import Series, Mean

        s = Series(Mean())
        with pytest.raises(ValueError):
            s.update("abc")
        assert s.weight.nobs == 0
        assert s.nobs == 0

    def test_non_numeric_batch(self) -> None:
        from onlinestats import Series, Mean, Extrema

        s = Series(Mean(), Extrema())
        with pytest.raises(ValueError):
            s.update_batch([1.0, "abc"])
        with pytest.raises(ValueError):
            s.update_batch(["abc"], minibatch_size=1)
        assert s.weight.nobs == 0
        assert all(stat.n == 0 for stat in s.stats)

    def test_stat_counts_only_after_conversion(self) -> None:
        """Stats convert the value before counting it."""
        from onlinestats import Mean, Moments

        for stat in (Mean(), Moments()):
            with pytest.raises(TypeError):
                stat.update(None, 0.5)
            assert stat.n == 0


class TestBatchUpdates:
    """Test sequence fits."""

    def test_replay_matches_single_updates(self, sample: np.ndarray) -> None:
        """fit(values) is fit(value) for each value in order."""
        from onlinestats import Series, Mean, Variance, fit

        a = Series(Mean(), Variance())
        fit(a, sample)
        b = Series(Mean(), Variance())
        for x in sample:
            fit(b, x)

        assert a.value() == b.value()
        assert a.weight.nobs == b.weight.nobs == len(sample)

    def test_scalar_gamma_reused(self) -> None:
        """A scalar override applies to every value."""
        from onlinestats import Series, Mean

        s = Series(Mean())
        s.update_batch([4.0, 8.0], gamma=0.5)

        # 0 -> 2 -> 5
        assert s.value() == (5.0,)
        assert s.weight.nobs == 2

    def test_gamma_sequence_pairwise(self) -> None:
        """A sequence of overrides is consumed one per value."""
        from onlinestats import Series, Mean

        s = Series(Mean())
        s.update_batch([2.0, 4.0], gamma=[1.0, 0.5])
        assert s.value() == (3.0,)

    def test_gamma_sequence_length_mismatch(self) -> None:
        """Mismatched gamma sequences are rejected before mutation."""
        from onlinestats import Series, Mean, RangeError

        s = Series(Mean())
        with pytest.raises(RangeError):
            s.update_batch([1.0, 2.0, 3.0], gamma=[1.0, 0.5])
        assert s.nobs == 0

    def test_gamma_sequence_checked_before_mutation(self) -> None:
        """One bad gamma in a sequence leaves the Series untouched."""
        from onlinestats import Series, Mean, RangeError

        s = Series(Mean())
        with pytest.raises(RangeError):
            s.update_batch([1.0, 2.0, 3.0], gamma=[1.0, 0.5, 2.0])
        assert s.nobs == 0
        assert s.value() == (0.0,)

    def test_gamma_and_minibatch_exclusive(self) -> None:
        from onlinestats import Series, Mean, ConfigurationError

        s = Series(Mean())
        with pytest.raises(ConfigurationError):
            s.update_batch([1.0, 2.0], gamma=0.5, minibatch_size=2)

    def test_empty_batch_is_noop(self) -> None:
        from onlinestats import Series, Mean

        s = Series(Mean())
        s.update_batch([])
        s.update_batch([], minibatch_size=3)
        assert s.nobs == 0
        assert s.weight.nobs == 0

    def test_order_matters(self) -> None:
        """Under non-equal weighting the traversal order changes the result."""
        from onlinestats import Series, Mean, ExponentialWeight

        a = Series(Mean(), weight=ExponentialWeight(0.5))
        a.update_batch([1.0, 2.0, 3.0])
        b = Series(Mean(), weight=ExponentialWeight(0.5))
        b.update_batch([3.0, 2.0, 1.0])

        assert a.value() != b.value()


class TestMinibatches:
    """Test minibatch fits."""

    def test_one_batch_equals_replay(self, sample: np.ndarray) -> None:
        """A single minibatch covering all values equals replaying them."""
        from onlinestats import Series, Mean, Variance, Moments, fit

        batched = fit(Series(Mean(), Variance(), Moments()), sample, minibatch_size=len(sample))
        replayed = fit(Series(Mean(), Variance(), Moments()), sample)

        mean_b, var_b, mom_b = batched.value()
        mean_r, var_r, mom_r = replayed.value()
        assert mean_b == pytest.approx(mean_r, rel=1e-10)
        assert var_b == pytest.approx(var_r, rel=1e-10)
        assert mom_b == pytest.approx(mom_r, rel=1e-8)

        assert batched.weight.nobs == 1
        assert replayed.weight.nobs == len(sample)
        assert batched.nobs == replayed.nobs == len(sample)

    def test_chunking(self) -> None:
        """Chunks of minibatch_size, last one shorter, one Weight step each."""
        from onlinestats import Series, Mean

        s = Series(Mean())
        s.update_batch(np.arange(1.0, 11.0), minibatch_size=4)

        # Chunk means 2.5, 6.5, 9.5 with gammas 1, 1/2, 1/3
        expected = 2.5
        expected += 0.5 * (6.5 - expected)
        expected += (9.5 - expected) / 3
        assert s.value()[0] == pytest.approx(expected)
        assert s.weight.nobs == 3
        assert s.nobs == 10
        assert s.stats[0].n == 10

    def test_invalid_minibatch_size(self) -> None:
        from onlinestats import Series, Mean, RangeError

        s = Series(Mean())
        with pytest.raises(RangeError):
            s.update_batch([1.0, 2.0], minibatch_size=0)
        assert s.nobs == 0

    def test_scalar_with_minibatch_rejected(self) -> None:
        from onlinestats import Series, Mean, fit, ConfigurationError

        with pytest.raises(ConfigurationError):
            fit(Series(Mean()), 1.0, minibatch_size=2)


class TestLockstep:
    """All stats see the same observations."""

    def test_stat_counts_match_nobs(self, sample: np.ndarray) -> None:
        from onlinestats import Series, Mean, Variance, Extrema, Moments

        s = Series(Mean(), Variance(), Extrema(), Moments())
        s.update_batch(sample[:100])
        s.update_batch(sample[100:], minibatch_size=37)
        s.update(1.0, gamma=0.1)

        assert s.nobs == len(sample) + 1
        assert all(stat.n == s.nobs for stat in s.stats)


class TestValue:
    """Test read-only results."""

    def test_value_does_not_mutate(self) -> None:
        from onlinestats import Series, Mean, Extrema, value

        s = Series(Mean(), Extrema())
        s.update_batch([1.0, 5.0, 3.0])
        first = value(s)
        second = value(s)

        assert first == second == (3.0, (1.0, 5.0))
        assert s.nobs == 3

    def test_to_frame(self) -> None:
        """DataFrame snapshot has one row per stat."""
        from onlinestats import Series, Mean, Variance

        s = Series(Mean(), Variance())
        s.update_batch([1.0, 2.0, 3.0, 4.0])
        df = s.to_frame()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['stat', 'nobs', 'value']
        assert df['stat'].tolist() == ['Mean', 'Variance']
        assert df['nobs'].tolist() == [4, 4]
        assert df['value'].iloc[0] == pytest.approx(2.5)

    def test_repr(self) -> None:
        from onlinestats import Series, Mean

        assert "Mean" in repr(Series(Mean()))
