"""
Settings tests.
"""

from invoicetree.core.config import Settings


def test_is_development_follows_environment():
    assert Settings(ENVIRONMENT="development").is_development
    assert Settings(ENVIRONMENT="Development").is_development
    assert not Settings(ENVIRONMENT="testing").is_development


def test_settings_expose_only_used_environment_flags():
    assert not hasattr(Settings(), "is_production")
