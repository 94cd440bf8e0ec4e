"""
Tests for the org-size classifier.
"""
import pytest

from engines.errors import PlanValidationError
from engines.org_size import (classify_org_size, get_org_size_label,
                              get_org_size_multiplier, ORG_SIZE_TIERS)


class TestBands:

    @pytest.mark.parametrize("count,label,multiplier", [
        (0, 'Small', 0.75), (10, 'Small', 0.75), (24, 'Small', 0.75),
        (25, 'Medium', 1), (50, 'Medium', 1), (99, 'Medium', 1),
        (100, 'Large', 1.5), (499, 'Large', 1.5),
        (500, 'Enterprise', 2), (1000, 'Enterprise', 2), (10 ** 6, 'Enterprise', 2),
    ])
    def test_band_boundaries(self, count, label, multiplier):
        assert classify_org_size(count) == (label, multiplier)

    def test_every_small_count_uses_three_quarters(self):
        assert {get_org_size_multiplier(c) for c in range(0, 25)} == {0.75}

    def test_accessors_agree_with_classifier(self):
        for count in (5, 60, 250, 750):
            assert (get_org_size_label(count), get_org_size_multiplier(count)) == classify_org_size(count)

    def test_bands_are_contiguous(self):
        for lower, upper in zip(ORG_SIZE_TIERS, ORG_SIZE_TIERS[1:]):
            assert lower['max'] == upper['min']
        assert ORG_SIZE_TIERS[0]['min'] == 0
        assert ORG_SIZE_TIERS[-1]['max'] is None

    def test_multiplier_never_decreases_with_size(self):
        multipliers = [get_org_size_multiplier(c) for c in range(0, 1200)]
        assert multipliers == sorted(multipliers)


class TestInvalidCounts:

    def test_negative_count_rejected(self):
        with pytest.raises(PlanValidationError):
            classify_org_size(-1)

    @pytest.mark.parametrize("bad", [True, '50', None, 12.5])
    def test_non_integer_rejected(self, bad):
        with pytest.raises(PlanValidationError):
            classify_org_size(bad)

    def test_whole_float_accepted(self):
        assert classify_org_size(100.0) == ('Large', 1.5)
