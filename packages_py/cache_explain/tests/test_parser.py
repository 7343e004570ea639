"""Tests for header parsing."""
from datetime import datetime, timezone

import pytest

from cache_explain import (
    CacheControlDirectives,
    Exchange,
    PragmaDirectives,
    extract_etag,
    extract_last_modified,
    get_header_value,
    interpret_exchange,
    is_vary_uncacheable,
    normalize_headers,
    parse_cache_control,
    parse_date_header,
    parse_delta_seconds,
    parse_pragma,
    parse_vary,
)


class TestParseCacheControl:
    def test_parse_empty_header(self):
        assert parse_cache_control(None) == CacheControlDirectives()
        assert parse_cache_control("") == CacheControlDirectives()

    def test_parse_no_store(self):
        result = parse_cache_control("no-store")
        assert result.no_store is True

    def test_parse_max_age(self):
        result = parse_cache_control("max-age=3600")
        assert result.max_age == 3600

    def test_parse_s_maxage(self):
        result = parse_cache_control("s-maxage=7200")
        assert result.s_maxage == 7200

    def test_parse_complex_header(self):
        header = "public, max-age=86400, s-maxage=3600, stale-while-revalidate=60, immutable"
        result = parse_cache_control(header)
        assert result.public is True
        assert result.max_age == 86400
        assert result.s_maxage == 3600
        assert result.immutable is True

    def test_case_insensitivity(self):
        result = parse_cache_control("Max-Age=100, No-Store, MUST-REVALIDATE")
        assert result.max_age == 100
        assert result.no_store is True
        assert result.must_revalidate is True

    def test_quoted_value(self):
        assert parse_cache_control('max-age="60"').max_age == 60

    @pytest.mark.parametrize("header", ["max-age=-1", "max-age=abc", "max-age=", "max-age", "max-age=1.5"])
    def test_malformed_numbers_are_absent(self, header):
        assert parse_cache_control(header).max_age is None

    def test_unknown_tokens_are_ignored(self):
        result = parse_cache_control(
            "foo, bar=baz, no-transform, stale-while-revalidate=60, private"
        )
        assert result == CacheControlDirectives(private=True)


class TestParseDeltaSeconds:
    def test_valid(self):
        assert parse_delta_seconds("0") == 0
        assert parse_delta_seconds(" 600 ") == 600

    def test_invalid(self):
        assert parse_delta_seconds(None) is None
        assert parse_delta_seconds("-5") is None
        assert parse_delta_seconds("ten") is None
        assert parse_delta_seconds("²") is None

    def test_too_many_digits(self):
        assert parse_delta_seconds("9" * 5000) is None
        assert parse_cache_control("max-age=" + "9" * 5000).max_age is None


class TestParsePragma:
    def test_empty(self):
        assert parse_pragma(None) == PragmaDirectives()

    def test_tokens(self):
        pragma = parse_pragma("No-Cache, no-store")
        assert pragma.no_cache is True
        assert pragma.no_store is True
        assert pragma.any is True

    def test_unrelated_token(self):
        assert parse_pragma("x-debug").any is False


class TestParseDateHeader:
    def test_valid_date(self):
        assert parse_date_header("Thu, 1 Jan 2099 00:00:00 GMT") == datetime(
            2099, 1, 1, tzinfo=timezone.utc
        )

    def test_converts_to_utc(self):
        result = parse_date_header("Thu, 01 Jan 2099 02:00:00 +0200")
        assert result == datetime(2099, 1, 1, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc

    @pytest.mark.parametrize("header", [None, "", "0", "tomorrow", "Thu, 99 Foo 2099"])
    def test_invalid_dates(self, header):
        assert parse_date_header(header) is None

    @pytest.mark.parametrize("header", [
        "Fri, 31 Dec 9999 23:59:59 -0100",
        "Fri, 31 Dec 9999 22:30:00 -0200",
    ])
    def test_out_of_range_after_utc_conversion(self, header):
        assert parse_date_header(header) is None


class TestVary:
    def test_parse_vary(self):
        assert parse_vary("Accept-Encoding, Origin") == ["accept-encoding", "origin"]
        assert parse_vary(None) == []

    def test_wildcard(self):
        assert is_vary_uncacheable("*") is True
        assert is_vary_uncacheable(" * ") is True
        assert is_vary_uncacheable("Origin, *") is True
        assert is_vary_uncacheable("Origin") is False
        assert is_vary_uncacheable(None) is False


class TestHeaderHelpers:
    def test_extract_etag(self):
        assert extract_etag({"etag": '"abc123"'}) == '"abc123"'
        assert extract_etag({"ETag": '"def456"'}) == '"def456"'
        assert extract_etag({}) is None

    def test_extract_last_modified(self):
        date = "Wed, 21 Oct 2015 07:28:00 GMT"
        assert extract_last_modified({"Last-Modified": date}) == date
        assert extract_last_modified({}) is None

    def test_get_header_value(self):
        assert get_header_value({"Content-Location": "/a"}, "content-location") == "/a"
        assert get_header_value({}, "content-location") is None

    def test_normalize_headers(self):
        assert normalize_headers({
            "Cache-Control": "public",
            "ETag": None,
            "Vary": ["Origin", "Accept"],
        }) == {"cache-control": "public", "vary": "Origin, Accept"}

    def test_normalize_combines_differently_cased_names(self):
        assert normalize_headers({"Vary": "Origin", "vary": "Accept"}) == {
            "vary": "Origin, Accept"
        }


class TestInterpretExchange:
    def test_collects_facts(self):
        facts = interpret_exchange(Exchange.create(
            method="options",
            status_code=204,
            url="/api",
            request_headers={"Origin": "https://example.com", "Pragma": "no-cache"},
            response_headers={
                "Date": "Fri, 22 Mar 2019 11:54:00 GMT",
                "Access-Control-Max-Age": "600",
                "ETag": "abc",
                "Vary": "*",
                "Content-Location": "/api",
            },
        ))
        assert facts.method == "OPTIONS"
        assert facts.is_cors_preflight is True
        assert facts.access_control_max_age == 600
        assert facts.validators.etag is True
        assert facts.validators.last_modified is False
        assert facts.vary_wildcard is True
        assert facts.request_pragma.no_cache is True
        assert facts.raw_request_pragma == "no-cache"
        assert facts.has_response_cache_control is False
        assert facts.timestamps.date == datetime(2019, 3, 22, 11, 54, tzinfo=timezone.utc)
        assert facts.content_location == "/api"

    def test_origin_on_get_is_not_a_preflight(self):
        facts = interpret_exchange(Exchange.create(
            method="GET", status_code=200, request_headers={"origin": "https://a.com"},
        ))
        assert facts.is_cors_preflight is False

    def test_header_pairs_are_combined(self):
        exchange = Exchange.create(
            method="GET",
            status_code="200",
            response_headers=[("Cache-Control", "public"), ("cache-control", "max-age=60")],
        )
        assert exchange.status_code == 200
        facts = interpret_exchange(exchange)
        assert facts.response_directives.public is True
        assert facts.response_directives.max_age == 60
