from fastapi import APIRouter, status

from aswbxml import __version__, get_code_page_table

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def healthcheck():
    """Liveness plus the codec build the service decodes with."""
    return {
        "status": "ok",
        "codec_version": __version__,
        "code_pages": len(get_code_page_table()),
    }
