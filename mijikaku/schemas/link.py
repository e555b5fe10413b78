from pydantic import BaseModel, Field


class LinkCreate(BaseModel):
    """Body of a shorten request.

    ``url`` is kept as a plain string so that syntactic validation (and
    its error body) happens in the URL validator, not in pydantic.
    """
    url: str = Field(..., description="The original URL to be shortened")

    model_config = {
        "json_schema_extra": {
            "example": {"url": "https://example.com/page"}
        }
    }
