"""
Venture template download.

- GET /template — the Markdown template as a file attachment
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.schemas.common import ErrorResponse
from app.services.template_service import TEMPLATE_FILENAME, TemplateService

router = APIRouter()


def _get_template_service() -> TemplateService:
    return TemplateService()


@router.get(
    "",
    response_class=Response,
    summary="Download the venture template",
    responses={
        200: {"content": {"text/markdown": {}}, "description": "Markdown template"},
        404: {"model": ErrorResponse, "description": "Template not found"},
    },
)
async def download_template(
    service: TemplateService = Depends(_get_template_service),
) -> Response:
    content = await service.read_template()
    return Response(
        content=content,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )
