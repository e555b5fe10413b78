from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from mijikaku.dependencies import get_link_service
from mijikaku.errors import ApiError
from mijikaku.schemas.link import LinkCreate
from mijikaku.services.link_service import LinkService

router = APIRouter(tags=["links"])


@router.post(
    "/",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    responses={
        422: {"model": ApiError, "description": "Not an absolute URL"},
        500: {"model": ApiError, "description": "Database error"},
    },
)
def create_short_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Shorten a URL; the body of the response is the short URL"""
    link = link_service.shorten(link_data.url)
    return link_service.short_url(link)
