"""Tests for load and save option models."""

import pytest
from pydantic import ValidationError

from linehist.options import LoadOptions, SaveOptions


class TestLoadOptions:
    def test_defaults(self):
        opts = LoadOptions()
        assert opts.skip_empty is True
        assert opts.skip_dup is True


class TestSaveOptions:
    def test_defaults(self):
        opts = SaveOptions()
        assert opts.max_size is None
        assert opts.max_entries is None
        assert opts.append is True
        assert opts.perm == 0o666

    def test_zero_limits_allowed(self):
        opts = SaveOptions(max_size=0, max_entries=0)
        assert opts.max_size == 0

    @pytest.mark.parametrize("field", ["max_size", "max_entries"])
    def test_negative_limits_rejected(self, field):
        with pytest.raises(ValidationError):
            SaveOptions(**{field: -1})

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            SaveOptions(max_entries=-5)
