from fastapi import APIRouter, Depends, Path, Query, status

from app import deps
from app.models.response import Page
from app.models.response import Post as PostResponse
from app.services.post_service import PostService

router = APIRouter()


@router.get("/archive", status_code=status.HTTP_200_OK)
def get_archive(
    post_service: PostService = Depends(deps.post_service),
) -> dict[str, int]:
    return post_service.get_archive()


@router.get("/tags", status_code=status.HTTP_200_OK)
def get_tags(
    post_service: PostService = Depends(deps.post_service),
) -> dict[str, int]:
    return post_service.get_tags()


@router.get(
    "/{year}/{month}/{day}/{slug}",
    status_code=status.HTTP_200_OK,
    response_model_exclude_none=True,
)
def get_by_post_path(
    slug: str,
    year: int = Path(ge=1970),
    month: int = Path(ge=1, le=12),
    day: int = Path(ge=1, le=31),
    post_service: PostService = Depends(deps.post_service),
) -> PostResponse:
    return post_service.get_by_post_path(f"{year}/{month}/{day}/{slug}")


@router.get(
    "/{slug}",
    status_code=status.HTTP_200_OK,
    response_model_exclude_none=True,
)
def get_post(
    slug: str, post_service: PostService = Depends(deps.post_service)
) -> PostResponse:
    return post_service.get_post(slug)


@router.get(
    "",
    response_model=Page,
    status_code=status.HTTP_200_OK,
    response_model_exclude_none=True,
)
def get_posts(
    exclusive_start_key: str | None = Query(None, alias="exclusiveStartKey"),
    tag: str | None = None,
    post_service: PostService = Depends(deps.post_service),
) -> Page:
    return post_service.get_posts(exclusive_start_key, tag)
