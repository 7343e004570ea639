"""Cacheability Routes.

Explains whether a captured exchange's response would be cached, and why.
Uses cache_explain for the explanation and header_pairs for pair-list headers.
"""

from typing import Dict, List, Optional, Tuple, Union

from fastapi import APIRouter
from pydantic import BaseModel, Field

from cache_explain import Exchange, explain_cacheability

HeadersInput = Union[
    Dict[str, Union[str, List[str], None]],
    List[Tuple[str, str]],
]


class ExchangeRequest(BaseModel):
    """A captured request/response exchange."""
    method: str
    url: Optional[str] = None
    statusCode: int
    requestHeaders: HeadersInput = Field(default_factory=dict)
    responseHeaders: HeadersInput = Field(default_factory=dict)


class CacheabilityResponse(BaseModel):
    """Cacheability explanation response."""
    summary: str
    type: Optional[str] = None
    explanation: str


router = APIRouter()


@router.post("", response_model=CacheabilityResponse)
async def explain_exchange(body: ExchangeRequest) -> CacheabilityResponse:
    """
    Explain the cacheability of an exchange.

    Header sections may be objects (values as strings, lists or null) or
    lists of [name, value] pairs. Repeated headers are combined.
    """
    exchange = Exchange.create(
        method=body.method,
        status_code=body.statusCode,
        request_headers=body.requestHeaders,
        response_headers=body.responseHeaders,
        url=body.url,
    )
    result = explain_cacheability(exchange)
    return CacheabilityResponse(**result.to_dict())
