"""
MenuBoard — Request Body Reader
=================================

What:  Reads a create/update body from either JSON or an HTML form.
Why:   API clients send JSON; the browser form on /new-restaurant-form and
       the delete buttons post form data. Both reach the same handlers.
How:   Dispatches on Content-Type. Anything that is not JSON is parsed as a
       form (urlencoded or multipart, via python-multipart).
"""

from typing import Any, Dict

from fastapi import Request

from menuboard.exceptions import ValidationError


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency returning the request body as a flat dict.

    An empty body yields {}. A JSON body that is not an object, or is not
    parseable, is a ValidationError (→ 400).
    """
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        if not await request.body():
            return {}
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError(message="Request body is not valid JSON")
        if not isinstance(data, dict):
            raise ValidationError(message="Request body must be a JSON object")
        return data

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
