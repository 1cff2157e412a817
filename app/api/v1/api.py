from fastapi import APIRouter

from app.api.v1.routers import pages_router, posts_router

router = APIRouter(prefix="/api/v1")
router.include_router(posts_router.router, prefix="/posts", tags=["posts"])
router.include_router(pages_router.router, prefix="/pages", tags=["pages"])
