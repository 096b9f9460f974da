"""Screenshot module schemas."""

import math
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


def is_truthy_json(value: Any) -> bool:
    """
    Truthiness of a decoded JSON value as a browser would judge it.

    Empty objects and arrays count as present; null, false, 0, NaN and ""
    do not.
    """
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


# =============================================================================
# REQUESTS
# =============================================================================

class RenderRequest(BaseModel):
    """
    Inbound request to render HTML and store the image.

    Only ``html`` is checked (present and truthy); the other fields are
    carried through as the caller sent them.
    """

    html: Any = Field(..., description="HTML content to render")
    filename: str | None = Field(None, description="Storage key; generated when omitted")
    screenshot_options: Any = Field(
        None,
        alias="screenshotOptions",
        description=(
            "Forwarded verbatim to the rendering service, replacing the defaults "
            "wholesale: omitBackground, fullPage, type (png|jpeg), quality, "
            "clip {x, y, width, height}, deviceScaleFactor"
        ),
    )

    @field_validator("filename", mode="before")
    @classmethod
    def coerce_filename(cls, value: Any) -> str | None:
        if not is_truthy_json(value):
            return None
        if isinstance(value, bool):
            return "true"
        if isinstance(value, str):
            return value
        return str(value)


# =============================================================================
# RESPONSES
# =============================================================================

class ScreenshotSuccessResponse(BaseModel):
    success: Literal[True] = True
    message: str
    filename: str
    size: int


class ScreenshotErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
