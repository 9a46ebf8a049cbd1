"""Tests for application settings validation."""

import pytest
from pydantic import ValidationError

from library_api.core.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.DEFAULT_PAGE_SIZE == 10
        assert settings.MAX_PAGE_SIZE == 20
        assert settings.API_PREFIX == "/api"

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")

    def test_default_page_size_cannot_exceed_max(self):
        """Test the default page must itself be a valid page size"""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_PAGE_SIZE=50, MAX_PAGE_SIZE=20)
