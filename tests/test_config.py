"""Tests for module-level configuration."""

import pytest

from recur import (
    InvalidParameterError,
    configure_recur,
    get_recur_config,
    reset_recur_config,
)


class TestConfig:
    """Test configure_recur and friends."""

    def test_defaults(self):
        """Defaults favour skipping unresolvable months."""
        config = get_recur_config()
        assert config.max_iterations == 100_000
        assert config.ndom_overflow == "skip"

    def test_configure(self):
        """Settings are applied to the singleton."""
        configure_recur(max_iterations=50, ndom_overflow="raise")
        config = get_recur_config()
        assert config.max_iterations == 50
        assert config.ndom_overflow == "raise"

    def test_partial_configure_keeps_other_values(self):
        """None leaves a setting untouched."""
        configure_recur(ndom_overflow="raise")
        configure_recur(max_iterations=7)
        assert get_recur_config().ndom_overflow == "raise"

    def test_reset(self):
        """reset_recur_config restores defaults."""
        configure_recur(max_iterations=5)
        reset_recur_config()
        assert get_recur_config().max_iterations == 100_000

    @pytest.mark.parametrize("value", [0, -1, 1.5, True])
    def test_invalid_max_iterations(self, value):
        """max_iterations must be a positive integer."""
        with pytest.raises(InvalidParameterError, match="max_iterations"):
            configure_recur(max_iterations=value)

    def test_invalid_ndom_overflow(self):
        """Only 'skip' and 'raise' are accepted."""
        with pytest.raises(InvalidParameterError, match="ndom_overflow"):
            configure_recur(ndom_overflow="wrap")
