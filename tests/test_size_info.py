import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest  # noqa: E402

from squaremap.errors import (  # noqa: E402
    DegenerateInputError,
    InvalidWeightError,
    NegativeWeightError,
)
from squaremap.size_info import SizeInfo, SizeInfoProcessor  # noqa: E402


def test_sorted_descending_and_normalized():
    processor = SizeInfoProcessor([1, 3, 2], float, 10, 6)
    infos = processor.size_infos
    assert [i.value for i in infos] == [3, 2, 1]
    assert [i.raw_size for i in infos] == [3.0, 2.0, 1.0]
    assert [i.normalized_size for i in infos] == pytest.approx([30.0, 20.0, 10.0])
    assert sum(i.normalized_size for i in infos) == pytest.approx(60.0)
    assert processor.total_size == 6.0
    assert processor.total_area == 60


def test_ties_keep_input_order():
    items = [("a", 1), ("b", 2), ("c", 1), ("d", 2)]
    infos = SizeInfoProcessor(items, lambda item: item[1], 4, 4).size_infos
    assert [i.value[0] for i in infos] == ["b", "d", "a", "c"]


def test_normalize_is_idempotent():
    info = SizeInfo("x", 4.0)
    assert not info.is_normalized
    once = info.normalize(2.0, 5.0)
    assert once.normalized_size == 10.0
    twice = once.normalize(2.0, 5.0)
    assert twice is once
    assert twice.normalized_size == 10.0
    # 已归一化的值不会被新的比例覆盖
    assert once.normalize(1.0, 100.0).normalized_size == 10.0


def test_size_info_is_frozen():
    info = SizeInfo("x", 1.0)
    with pytest.raises(AttributeError):
        info.raw_size = 2.0


def test_zero_weight_allowed():
    infos = SizeInfoProcessor([0, 5], float, 2, 5).size_infos
    assert [i.normalized_size for i in infos] == [10.0, 0.0]


@pytest.mark.parametrize("values", [[], [0, 0, 0]])
def test_degenerate_input(values):
    with pytest.raises(DegenerateInputError):
        SizeInfoProcessor(values, float, 10, 10)


def test_negative_weight_rejected():
    with pytest.raises(NegativeWeightError) as info:
        SizeInfoProcessor([3, -1, 2], float, 10, 10)
    assert info.value.value == -1
    assert info.value.weight == -1.0


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_non_finite_weight_rejected(bad):
    with pytest.raises(InvalidWeightError) as info:
        SizeInfoProcessor([1.0, bad], float, 10, 10)
    assert not isinstance(info.value, NegativeWeightError)


@pytest.mark.parametrize("weight", [5e-324, 1e-310, 1e308])
def test_extreme_weights_normalize_to_canvas_area(weight):
    infos = SizeInfoProcessor(["a", "b", "c"], lambda _: weight, 10, 6).size_infos
    sizes = [i.normalized_size for i in infos]
    assert all(math.isfinite(s) for s in sizes)
    assert sizes == pytest.approx([20.0, 20.0, 20.0])
