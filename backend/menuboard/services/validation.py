"""
MenuBoard — Restaurant Field Validation
=========================================

What:  Pure validation and sanitization for restaurant create/update bodies.
Why:   Handlers call these explicitly, so which routes validate is visible
       at the call site (POST and PUT /restaurants do, PATCH does not).
How:   validate_restaurant() returns a list of FieldError (empty = valid);
       sanitize_restaurant() returns the values that are persisted.

Rules:
    name   required; trimmed and HTML-escaped; at most 50 characters
           after escaping
    image  http, https or ftp URL with a dotted host name or an IP
           address; the scheme may be omitted ("example.com/p.jpg")
"""

import html
import ipaddress
from typing import Any, Dict, List, Mapping

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from menuboard.models.restaurant import NAME_MAX_LENGTH
from menuboard.schemas.restaurant import FieldError

_url_adapter = TypeAdapter(AnyUrl)

URL_SCHEMES = ("http", "https", "ftp")

# Characters html.escape() leaves alone but that are still escaped in names
_EXTRA_ESCAPES = str.maketrans({"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"})


def _clean_name(value: Any) -> str:
    if value is None:
        return ""
    return html.escape(str(value).strip()).translate(_EXTRA_ESCAPES)


def _is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def _has_public_host(host: str) -> bool:
    labels = host.rstrip(".").split(".")
    if len(labels) < 2 or not all(labels):
        return False
    tld = labels[-1]
    return len(tld) >= 2 and (tld.isalpha() or tld.startswith("xn--"))


def _is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    if "://" not in candidate:
        candidate = "http://" + candidate

    try:
        url = _url_adapter.validate_python(candidate)
    except PydanticValidationError:
        return False

    if url.scheme not in URL_SCHEMES or not url.host:
        return False
    return _is_ip(url.host) or _has_public_host(url.host)


def validate_restaurant(payload: Mapping[str, Any]) -> List[FieldError]:
    """
    Check a create/full-update body against the restaurant rules.

    Every rule runs, so a body with both a bad name and a bad image
    reports two errors.
    """
    errors: List[FieldError] = []

    raw_name = payload.get("name")
    name = _clean_name(raw_name)
    if not name:
        errors.append(FieldError(
            field="name",
            constraint="required",
            value=raw_name,
            message="name must not be empty",
        ))
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(FieldError(
            field="name",
            constraint="max_length",
            value=raw_name,
            message=f"name must be at most {NAME_MAX_LENGTH} characters",
        ))

    raw_image = payload.get("image")
    if not _is_url(raw_image):
        errors.append(FieldError(
            field="image",
            constraint="url",
            value=raw_image,
            message="image must be a valid URL",
        ))

    return errors


def sanitize_restaurant(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the persisted form of a validated body: escaped name, trimmed image."""
    image = payload.get("image")
    return {
        "name": _clean_name(payload.get("name")),
        "image": image.strip() if isinstance(image, str) else image,
    }
