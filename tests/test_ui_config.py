import dataclasses

import pytest

from signup_ui.ui_config import DEFAULT_SITE_NAME, DEFAULT_TIMEOUT, load_config


def test_defaults_with_empty_environment():
    config = load_config({})
    assert config.app_mode == "public"
    assert config.api_base == ""
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.retries == 0
    assert config.site_name == DEFAULT_SITE_NAME
    assert not config.is_admin


def test_admin_mode_reads_admin_base():
    config = load_config({
        "APP_MODE": "admin",
        "API_BASE": "https://public.test",
        "ADMIN_API_BASE": "https://admin.test/",
        "API_TIMEOUT": "12.5",
        "API_RETRIES": "2",
    })
    assert config.is_admin
    assert config.api_base == "https://admin.test"
    assert config.timeout == 12.5
    assert config.retries == 2


def test_site_name_falls_back_to_brand_name():
    assert load_config({"BRAND_NAME": "Acme"}).site_name == "Acme"
    assert load_config({"BRAND_NAME": "Acme", "SITE_NAME": "Portal"}).site_name == "Portal"


def test_invalid_numbers_are_rejected():
    with pytest.raises(ValueError):
        load_config({"API_TIMEOUT": "soon"})
    with pytest.raises(ValueError):
        load_config({"API_RETRIES": "many"})


def test_non_positive_timeout_uses_default_and_negative_retries_clamp():
    config = load_config({"API_TIMEOUT": "0", "API_RETRIES": "-3"})
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.retries == 0


def test_config_is_immutable():
    config = load_config({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_base = "https://elsewhere.test"
