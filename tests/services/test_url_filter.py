import pytest

from linkcollector.domain.filter_condition import FilterCondition
from linkcollector.services.url_filter import (
    contains_self_reference,
    is_admitted,
    is_default_excluded,
    matches_filters,
)


def test_no_filters_admits_everything_not_excluded():
    assert is_admitted("https://example.com/page")
    assert is_admitted("https://example.org/page", filters=[])


def test_unparsable_url_is_rejected():
    assert not is_admitted("not a url")
    assert not is_admitted("http://[::1/broken")


@pytest.mark.parametrize("path", [
    "/admin", "/login", "/logout", "/signin", "/signout", "/register",
    "/account/settings", "/wp-admin/edit.php", "/wp-login.php", "/cart", "/shop/checkout",
])
def test_default_excluded_paths(path):
    assert is_default_excluded(f"https://example.com{path}")
    assert not is_admitted(f"https://example.com{path}")


def test_default_exclusion_cannot_be_overridden_by_filters():
    filters = [FilterCondition(domain="example.com")]
    assert not is_admitted("https://example.com/wp-admin/edit.php", filters)
    assert is_admitted("https://example.com/blog/post", filters)


def test_domain_matches_by_substring_of_hostname():
    filters = [FilterCondition(domain="example.com")]
    assert is_admitted("https://sub.example.com/page", filters)
    assert not is_admitted("https://example.org/page", filters)


def test_domain_list_matches_any():
    filters = [FilterCondition(domain=["a.com", "b.com"])]
    assert is_admitted("https://b.com/x", filters)
    assert not is_admitted("https://c.com/x", filters)


def test_path_prefix_is_case_sensitive_prefix():
    filters = [FilterCondition(path_prefix="/docs")]
    assert is_admitted("https://example.com/docs/intro", filters)
    assert not is_admitted("https://example.com/Docs/intro", filters)
    assert not is_admitted("https://example.com/api/docs", filters)


def test_regex_is_tested_against_full_url():
    filters = [FilterCondition(regex=r"\?page=\d+$")]
    assert is_admitted("https://example.com/list?page=2", filters)
    assert not is_admitted("https://example.com/list?page=x", filters)


def test_keywords_match_anywhere_in_url():
    filters = [FilterCondition(keywords=["tutorial", "guide"])]
    assert is_admitted("https://example.com/x?topic=guide", filters)
    assert not is_admitted("https://example.com/reference", filters)


def test_fields_in_one_condition_are_anded():
    filters = [FilterCondition(domain="example.com", path_prefix="/blog")]
    assert is_admitted("https://example.com/blog/1", filters)
    assert not is_admitted("https://example.com/news/1", filters)
    assert not is_admitted("https://other.com/blog/1", filters)


def test_conditions_are_ored():
    filters = [FilterCondition(domain="example.com"), FilterCondition(keywords="python")]
    assert is_admitted("https://example.com/a", filters)
    assert is_admitted("https://docs.python.org/3/", filters)
    assert not is_admitted("https://rust-lang.org/", filters)


def test_share_link_back_to_base_is_rejected():
    base = "https://example.com/blog/"
    share = "https://twitter.com/share?url=https://example.com/blog/"
    assert contains_self_reference(share, base)
    assert not is_admitted(share, base_url=base)


def test_encoded_share_link_is_rejected():
    base = "https://example.com/blog/"
    share = "https://www.facebook.com/sharer.php?u=https%3A%2F%2Fexample.com%2Fblog%2F"
    assert not is_admitted(share, base_url=base)


def test_base_in_fragment_is_rejected():
    base = "https://example.com/"
    assert not is_admitted("https://other.com/page#ref=https://example.com/", base_url=base)


def test_url_equal_to_base_is_not_a_self_reference():
    base = "https://example.com/?ref=https://example.com/"
    assert not contains_self_reference(base, base)


def test_base_in_path_is_not_a_share_link():
    assert is_admitted("https://archive.org/web/https://example.com/", base_url="https://example.com/")


def test_matches_filters_ignores_default_exclusions():
    assert matches_filters("https://example.com/admin", None)


def test_filter_is_idempotent():
    filters = [FilterCondition(domain="example.com", regex="blog")]
    url = "https://example.com/blog/post"
    assert is_admitted(url, filters) == is_admitted(url, filters)
    url = "https://example.org/blog/post"
    assert is_admitted(url, filters) == is_admitted(url, filters) is False
