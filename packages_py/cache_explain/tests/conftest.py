"""Pytest configuration for cache_explain tests."""
import logging

import pytest

from cache_explain import Exchange

logging.getLogger("cache_explain").setLevel(logging.DEBUG)


@pytest.fixture
def response_date():
    """A fixed, valid HTTP Date header value."""
    return "Fri, 22 Mar 2019 11:54:00 GMT"


@pytest.fixture
def make_exchange():
    """Build a GET 200 exchange for /, overriding any part of it."""

    def _make(
        method="GET",
        url="/",
        status_code=200,
        request_headers=None,
        response_headers=None,
    ):
        return Exchange.create(
            method=method,
            status_code=status_code,
            request_headers=request_headers or {},
            response_headers=response_headers or {},
            url=url,
        )

    return _make
