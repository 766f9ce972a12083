import argparse

import pytest

from run_strategy_compare import positive_int, run_single_path


def test_single_path_metrics():
    res = run_single_path(0.1, 0.5, n_steps=5, seed=1)
    assert set(res) == {"final_pnl", "sharpe", "max_drawdown", "avg_abs_inventory"}
    assert res["max_drawdown"] <= 0.0


def test_zero_steps_rejected():
    with pytest.raises(ValueError):
        run_single_path(0.1, 0.5, n_steps=0)


@pytest.mark.parametrize("text", ["0", "-3"])
def test_positive_int_rejects_non_positive(text):
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int(text)
    assert positive_int("7") == 7
