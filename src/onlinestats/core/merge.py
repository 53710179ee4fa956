"""
Merging independently accumulated Series.

merge(series1, series2, mode) folds series2 into series1 in place:

    mode          ratio                          nobs added
    ----          -----                          ----------
    'append'      n2 / (n1 + n2)                 n2
    'mean'        n2 / (n1 + n2)                 n2
    'singleton'   series1.weight.next()          1
    r (number)    r, 0 <= r <= 1                 n2

'append' treats series2's history as having happened after series1's.
'mean' computes the same ratio and exists for callers who think in terms
of a count-weighted average. 'singleton' treats all of series2 as one
more observation equal to series2.sample_mean: it is fed through
series1.update, so every stat sees it exactly as it would a new data
point under series1's own Weight schedule. A singleton merge of an empty
series2 changes nothing.

series2 is never modified. Merge is not commutative in general.
"""

from numbers import Real
from typing import Any, Union

from loguru import logger

from onlinestats.constants import MERGE_APPEND, MERGE_MEAN, MERGE_SINGLETON
from onlinestats.errors import ConfigurationError, RangeError, TypeMismatchError


def check_compatible(series1: Any, series2: Any) -> None:
    """
    Require the same stat types in the same order.

    Stats with parameters that must agree (such as QuantileSGD levels)
    expose check_mergeable(other), which runs here so a failed merge
    leaves series1 untouched.

    Raises:
        TypeMismatchError: If the stat tuples differ structurally
    """
    types1 = [type(s) for s in series1.stats]
    types2 = [type(s) for s in series2.stats]
    if types1 != types2:
        raise TypeMismatchError(
            "Cannot merge Series with different stats: "
            f"{[t.__name__ for t in types1]} vs {[t.__name__ for t in types2]}"
        )
    for s1, s2 in zip(series1.stats, series2.stats):
        check = getattr(s1, 'check_mergeable', None)
        if check is not None:
            check(s2)


def merge(series1: Any, series2: Any, mode: Union[str, float] = MERGE_APPEND) -> Any:
    """
    Merge series2 into series1.

    Args:
        series1: Target Series, modified in place
        series2: Source Series, left unchanged
        mode: 'append', 'mean', 'singleton', or a ratio in [0, 1]

    Returns:
        series1

    Raises:
        TypeMismatchError: If the two Series hold different stat types
        ConfigurationError: If mode is an unknown string
        RangeError: If a numeric mode is outside [0, 1]

    Example:
        >>> a = online_summary(x1)
        >>> b = online_summary(x2)
        >>> merge(a, b, 'append')  # a now summarizes concat(x1, x2)
    """
    check_compatible(series1, series2)

    if isinstance(mode, str):
        if mode in (MERGE_APPEND, MERGE_MEAN):
            total = series1.nobs + series2.nobs
            ratio = series2.nobs / total if total > 0 else 0.0
            _apply(series1, series2, ratio, series2.nobs)
            series1.weight.nobs += series2.weight.nobs
        elif mode == MERGE_SINGLETON:
            if series2.nobs == 0:
                logger.debug("Singleton merge of an empty series skipped")
                return series1
            series1.update(series2.sample_mean)
            ratio = series1.weight.gamma(series1.weight.nobs)
        else:
            raise ConfigurationError(
                f"Unknown merge mode '{mode}'; expected "
                f"'{MERGE_APPEND}', '{MERGE_MEAN}', '{MERGE_SINGLETON}' or a ratio"
            )
    elif isinstance(mode, Real) and not isinstance(mode, bool):
        ratio = float(mode)
        if not 0.0 <= ratio <= 1.0:
            raise RangeError(f"Merge ratio must be in [0, 1], got {ratio}")
        _apply(series1, series2, ratio, series2.nobs)
        series1.weight.nobs += series2.weight.nobs
    else:
        raise ConfigurationError(f"Merge mode must be a string or a number, got {mode!r}")

    logger.debug("Merged series: mode={}, ratio={:.6g}, nobs={}", mode, ratio, series1.nobs)
    return series1


def _apply(series1: Any, series2: Any, ratio: float, n: int) -> None:
    for s1, s2 in zip(series1.stats, series2.stats):
        s1.merge(s2, ratio, n)
    total = series1.nobs + n
    if total > 0:
        series1.sample_mean += n * (series2.sample_mean - series1.sample_mean) / total
    series1.nobs = total
