"""
Sitemap endpoint
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from app.services.sitemap_cache import SitemapGenerationError, SitemapService

router = APIRouter()


def get_sitemap_service(request: Request) -> SitemapService:
    """Dependency returning the process-wide sitemap service"""
    return request.app.state.sitemap_service


@router.get("/sitemap.xml")
def serve_sitemap(service: SitemapService = Depends(get_sitemap_service)):
    """
    Serve sitemap.xml, cached in memory for SITEMAP_CACHE_TTL_MS
    """
    try:
        xml = service.serve()
    except SitemapGenerationError:
        # logged by the service
        return PlainTextResponse("Server error generating sitemap", status_code=500)

    return Response(content=xml, media_type="application/xml")
