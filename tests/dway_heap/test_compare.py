import operator

import pytest

from src.dway_heap.compare import (
    IdentityKey,
    default_compare,
    default_key,
    reverse_compare,
    validate_compare,
    validate_element,
)
from src.dway_heap.exceptions import ConstructionArgumentError


class TestCompare:
    def test_default_compare(self):
        assert default_compare(1, 2) == -1
        assert default_compare(2, 1) == 1
        assert default_compare(2, 2) == 0
        assert default_compare("a", "b") == -1

    def test_reverse_compare(self):
        compare = reverse_compare(default_compare)
        assert compare(1, 2) == 1
        assert compare(2, 1) == -1
        assert compare(3, 3) == 0

    def test_validate_compare_accepts_two_arguments(self):
        def compare(x, y):
            return 0

        assert validate_compare(compare) is compare
        assert validate_compare(operator.sub) is operator.sub
        assert validate_compare(lambda x, y, *, reverse=False: 0)

    def test_validate_compare_accepts_defaulted_parameters(self):
        def compare(x, y, reverse=False):
            return default_compare(y, x) if reverse else default_compare(x, y)

        assert validate_compare(compare) is compare
        assert validate_compare(lambda x, y, *rest: 0)

    @pytest.mark.parametrize(
        "compare", [lambda x=0, y=0: 0, lambda x, y=0: 0, lambda x, y, z=0, *, w: 0]
    )
    def test_validate_compare_rejects_missing_required(self, compare):
        with pytest.raises(ConstructionArgumentError):
            validate_compare(compare)

    @pytest.mark.parametrize(
        "compare",
        [None, 3, lambda: 0, lambda x: 0, lambda x, y, z: 0, lambda *a: 0]
    )
    def test_validate_compare_rejects(self, compare):
        with pytest.raises(ConstructionArgumentError):
            validate_compare(compare)

    @pytest.mark.parametrize("value", [0, 0.0, "", [], {}, (), False, "x"])
    def test_valid_elements(self, value):
        assert validate_element(value)

    @pytest.mark.parametrize("value", [None, lambda: 1, len, object])
    def test_invalid_elements(self, value):
        assert not validate_element(value)

    def test_default_key(self):
        assert default_key(5) == 5
        assert default_key("node") == "node"
        assert default_key((1, "a")) == (1, "a")

        value = [1, 2]
        key = default_key(value)
        assert isinstance(key, IdentityKey)
        assert key == default_key(value)
        assert key != default_key([1, 2])
        assert hash(key) == hash(default_key(value))
        assert isinstance(default_key((1, [2])), IdentityKey)
