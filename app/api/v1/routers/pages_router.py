from fastapi import APIRouter, Depends, status

from app import deps
from app.models.response import Post as PostResponse
from app.services.post_service import PostService

router = APIRouter()


@router.get(
    "/{slug}",
    status_code=status.HTTP_200_OK,
    response_model_exclude_none=True,
)
def get_page(
    slug: str, post_service: PostService = Depends(deps.post_service)
) -> PostResponse:
    return post_service.get_page(slug)
