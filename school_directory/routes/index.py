from fastapi import APIRouter, Request

from school_directory.core.config import settings

router = APIRouter(tags=["Index"])


@router.get("/")
async def index(request: Request):
    """Service landing information with links to the school operations."""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "links": {
            "add_school": {"method": "POST", "href": str(request.url_for("create_school").path)},
            "show_schools": {"method": "GET", "href": str(request.url_for("list_schools").path)},
            "images": settings.STATIC_URL_PATH,
        }
    }
