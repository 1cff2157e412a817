from app.services.post_service import PostService


def post_service() -> PostService:
    return PostService()
