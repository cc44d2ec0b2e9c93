# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .entities import Platform, TrafficRequest
from .exceptions import InvalidBlogUrlError, MissingTrafficFieldsError, UnsupportedPlatformError

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_traffic_request(platform: Any, blog_url: Any) -> TrafficRequest:
    """Check a raw ``(platform, blog_url)`` pair and return the typed request.

    Rules are applied in order: both present, platform supported, URL absolute
    and well formed. The first violated rule is raised.
    """

    missing = [
        name
        for name, value in (("platform", platform), ("blogUrl", blog_url))
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise MissingTrafficFieldsError(missing)

    if platform not in Platform.values():
        raise UnsupportedPlatformError(platform, Platform.values())

    candidate = blog_url.strip()
    try:
        _URL_ADAPTER.validate_python(candidate)
    except PydanticValidationError as exc:
        raise InvalidBlogUrlError() from exc

    return TrafficRequest(platform=Platform(platform), blog_url=candidate)


__all__ = ["validate_traffic_request"]
