import pytest

from signup_ui.utils.mode import get_app_mode, normalize_api_base, resolve_api_base


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        (" https://api.example.test ", "https://api.example.test"),
        ("https://api.example.test/", "https://api.example.test"),
        ("https://api.example.test//", "https://api.example.test/"),
        (42, None),
    ],
)
def test_normalize_api_base(raw, expected):
    assert normalize_api_base(raw) == expected


def test_normalize_strips_only_one_trailing_slash_per_pass():
    once = normalize_api_base("https://x.test///")
    assert once == "https://x.test//"
    assert normalize_api_base(once) == "https://x.test/"


@pytest.mark.parametrize(
    "raw, expected",
    [("admin", "admin"), (" ADMIN ", "admin"), ("public", "public"), ("", "public"), (None, "public"), ("other", "public")],
)
def test_get_app_mode(raw, expected):
    assert get_app_mode(raw) == expected


def test_admin_mode_prefers_admin_base():
    assert resolve_api_base("admin", "https://public.test", "https://admin.test/") == "https://admin.test"


def test_public_mode_uses_public_base():
    assert resolve_api_base("public", "https://public.test/", "https://admin.test") == "https://public.test"


def test_unset_override_means_same_origin():
    assert resolve_api_base("admin", "https://public.test", "  ") == ""
    assert resolve_api_base("public", None, "https://admin.test") == ""


def test_resolution_is_pure():
    args = ("admin", "https://p.test", "https://a.test")
    assert resolve_api_base(*args) == resolve_api_base(*args)
