"""Tests for korrupt.core.exceptions."""

import pytest

from korrupt.core.exceptions import ConfigError, KorruptError, LengthError


class TestKorruptError:
    """Tests for KorruptError base exception."""

    def test_basic_initialization(self):
        """Test basic error initialization with message only."""
        error = KorruptError("Test error message")

        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.error_code is None
        assert error.context == {}

    def test_with_all_parameters(self):
        """Test error initialization with all parameters."""
        error = KorruptError("Bad range", error_code="INVALID_RANGE", context={"start": 4})

        assert error.error_code == "INVALID_RANGE"
        assert error.context == {"start": 4}

    def test_context_defaults_to_empty_dict(self):
        """Test that context defaults to empty dict when None."""
        assert KorruptError("Test", context=None).context == {}


class TestSubclasses:
    """Tests for the concrete error types."""

    @pytest.mark.parametrize("error_cls", [ConfigError, LengthError])
    def test_is_korrupt_error(self, error_cls):
        """Test subclasses can be caught as KorruptError."""
        with pytest.raises(KorruptError) as exc_info:
            raise error_cls("boom", error_code="X")

        assert isinstance(exc_info.value, error_cls)
        assert exc_info.value.error_code == "X"

    def test_distinct_types(self):
        """Test config and length errors are not interchangeable."""
        assert not issubclass(ConfigError, LengthError)
        assert not issubclass(LengthError, ConfigError)
