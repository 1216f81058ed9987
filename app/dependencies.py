# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from app.config import Settings
from app.exceptions import InvalidRequestError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_app_settings(request: Request) -> Settings:
    """
    Get the Settings instance the app was created with.

    Handlers read configuration through this rather than get_settings(),
    so tests can build an app around injected fake settings.
    """
    return request.app.state.settings


async def read_params(request: Request) -> dict[str, Any]:
    """
    Merge query string and body arguments into one dict.

    Body values win over query values with the same name. Supported bodies:
    - JSON object (application/json)
    - form fields (urlencoded or multipart)

    Raises:
        InvalidRequestError: 400 if a JSON body isn't a valid JSON object
    """
    params: dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("application/json"):
        if not await request.body():
            return params
        try:
            payload = await request.json()
        except ValueError as e:
            raise InvalidRequestError("Request body is not valid JSON.") from e
        if not isinstance(payload, dict):
            raise InvalidRequestError("Request body must be a JSON object.")
        params.update(payload)

    elif content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        # Uploaded files aren't arguments
        params.update({key: value for key, value in form.items() if isinstance(value, str)})

    return params


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RequestParams = Annotated[dict[str, Any], Depends(read_params)]
