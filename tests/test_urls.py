import pytest

from utils.urls import add_back_url_param, anchor_site_relative, is_safe_redirect_url, join_links


@pytest.mark.parametrize(
    "url",
    ["/account/profile", "/", "/search?q=birds&page=2", " /padded "],
)
def test_relative_paths_are_safe(url):
    assert is_safe_redirect_url(url)


@pytest.mark.parametrize(
    "url",
    [
        None,
        "",
        "http://evil.example.com/steal",
        "https://evil.example.com",
        "//evil.example.com/steal",
        "/\\evil.example.com",
        "javascript:alert(1)",
        "account/profile",
        "/next\r\nSet-Cookie: x=1",
    ],
)
def test_untrusted_urls_are_rejected(url):
    assert not is_safe_redirect_url(url, host_url="http://www.example.com/")


def test_same_origin_absolute_urls_need_opt_in():
    url = "https://www.example.com/account"
    host = "https://WWW.example.com/"

    assert not is_safe_redirect_url(url, host_url=host)
    assert is_safe_redirect_url(url, host_url=host, allow_same_origin=True)
    assert not is_safe_redirect_url("http://www.example.com/account", host_url=host, allow_same_origin=True)
    assert not is_safe_redirect_url("https://www.example.com.evil.io/", host_url=host, allow_same_origin=True)


def test_join_links():
    assert join_links("/Security/login", "logout") == "/Security/login/logout"
    assert join_links("/Security/", "/changepassword/") == "/Security/changepassword/"
    assert join_links("/a?x=1", "b", "?y=2") == "/a/b?x=1&y=2"
    assert join_links(None, "", "/a") == "/a"


def test_add_back_url_param_encodes_value():
    assert add_back_url_param("/Security/changepassword", "/test/link?a=1&b=2") == (
        "/Security/changepassword?BackURL=%2Ftest%2Flink%3Fa%3D1%26b%3D2"
    )
    assert add_back_url_param("/Security/changepassword", None) == "/Security/changepassword"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("test/link", "/test/link"),
        (" account/profile?tab=2 ", "/account/profile?tab=2"),
        ("/already/rooted", "/already/rooted"),
        ("http://evil.example.com/steal", "http://evil.example.com/steal"),
        ("//evil.example.com", "//evil.example.com"),
        ("\\evil.example.com", "\\evil.example.com"),
        (None, None),
    ],
)
def test_anchor_site_relative(url, expected):
    assert anchor_site_relative(url) == expected


def test_anchored_paths_pass_the_safety_check_but_foreign_urls_do_not():
    assert is_safe_redirect_url(anchor_site_relative("test/link"))
    assert not is_safe_redirect_url(anchor_site_relative("//evil.example.com"))
    assert not is_safe_redirect_url(anchor_site_relative("javascript:alert(1)"))
