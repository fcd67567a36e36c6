"""
Template service — serves the downloadable venture template (Markdown).
"""

import logging
from pathlib import Path
from typing import Union

from app.core.config import settings
from app.core.exceptions import NotFoundException

logger = logging.getLogger(__name__)

TEMPLATE_FILENAME = "venture-template.md"


class TemplateService:
    def __init__(self, template_path: Union[str, Path, None] = None):
        self._path = Path(template_path or settings.VENTURE_TEMPLATE_PATH)

    async def read_template(self) -> str:
        """Raises :class:`NotFoundException` if the template file cannot be read."""
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError:
            logger.warning("Venture template unreadable at %s", self._path, exc_info=True)
            raise NotFoundException("Template not found")
