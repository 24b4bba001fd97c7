from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, nan

import numpy as np
import pytest

from pysatl_poisson.support import IntegerLatticeSupport, Support


class TestIntegerLatticeSupport:
    support_examples = {
        "non_negative": IntegerLatticeSupport(),
        "bounded_left": IntegerLatticeSupport(min_k=5),
        "full_bounded": IntegerLatticeSupport(min_k=0, max_k=10),
        "empty": IntegerLatticeSupport(min_k=10, max_k=5),
    }

    def test_protocol(self):
        support = self.support_examples["non_negative"]
        assert isinstance(support, Support)

    @pytest.mark.parametrize(
        "support_name, point, expected_result",
        [
            ("non_negative", 0, True),
            ("non_negative", 1, True),
            ("non_negative", 3.0, True),
            ("non_negative", 1.5, False),
            ("non_negative", -1, False),
            ("non_negative", inf, False),
            ("non_negative", nan, False),
            ("bounded_left", 4, False),
            ("bounded_left", 5, True),
            ("full_bounded", 10, True),
            ("full_bounded", 11, False),
            ("empty", 7, False),
        ],
    )
    def test_contains_scalar(self, support_name, point, expected_result):
        support = self.support_examples[support_name]
        assert (point in support) is expected_result
        assert support.contains(point) is expected_result

    @pytest.mark.parametrize(
        "support_name, points, expected_result",
        [
            ("non_negative", np.array([-1.0, 0.0, 0.5, 7.0]), [False, True, False, True]),
            ("full_bounded", np.array([-2, 0, 10, 12]), [False, True, True, False]),
            ("non_negative", np.array([]), []),
        ],
    )
    def test_contains_array(self, support_name, points, expected_result):
        result = self.support_examples[support_name].contains(points)
        assert isinstance(result, np.ndarray)
        assert result.tolist() == expected_result

    def test_is_immutable(self):
        support = self.support_examples["non_negative"]
        with pytest.raises(AttributeError):
            support.min_k = 3  # type: ignore[misc]
