from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from mijikaku.dependencies import get_link_service
from mijikaku.errors import ApiError
from mijikaku.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{link_id}",
    status_code=status.HTTP_302_FOUND,
    response_class=Response,
    responses={
        302: {"description": "Redirect to the stored URL"},
        404: {"model": ApiError, "description": "Unknown id (when distinguish_not_found is on)"},
        500: {"model": ApiError, "description": "Database error or unknown id"},
    },
)
def redirect_to_url(
    link_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL.

    Read-only: repeated requests for the same id always return the
    same target.
    """
    url = link_service.resolve(link_id)
    # The stored URL is already normalized; RedirectResponse would quote it again
    return Response(status_code=status.HTTP_302_FOUND, headers={"location": url})
