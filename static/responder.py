"""Static asset responder with a canonical-path containment guard."""

import logging
from pathlib import Path

from starlette.responses import FileResponse

from core.exceptions import AssetForbiddenError, AssetNotFoundError

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


def mime_type(path: Path) -> str:
    """Content type for a file, derived from its extension."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)


class StaticResponder:
    """Serves files from a single asset root.

    Request paths are joined onto the root and canonicalized (``..`` collapsed,
    symlinks followed). Anything that lands outside the resolved root is
    refused, so sibling directories sharing the root's name as a prefix
    (``public-evil`` next to ``public``) are refused too.
    """

    def __init__(self, root: Path, index_document: str = "index.html"):
        self.root = Path(root).resolve()
        self.index_document = index_document

    def resolve(self, request_path: str) -> Path:
        """Map a URL path onto a file inside the asset root.

        Args:
            request_path: Decoded URL path, e.g. "/css/app.css"

        Returns:
            Canonical path of an existing regular file

        Raises:
            AssetForbiddenError: If the path escapes the asset root
            AssetNotFoundError: If no regular file exists at the path
        """
        relative = request_path.lstrip("/") or self.index_document

        try:
            candidate = (self.root / relative).resolve()
        except (OSError, ValueError) as e:
            raise AssetForbiddenError("Unresolvable asset path", {"path": request_path}) from e

        if not candidate.is_relative_to(self.root):
            logger.warning(f"Blocked asset request outside root: {request_path!r}")
            raise AssetForbiddenError("Asset path escapes root", {"path": request_path})

        try:
            is_file = candidate.is_file()
        except OSError as e:
            # e.g. ENAMETOOLONG for an over-long segment
            raise AssetNotFoundError("File not found", {"path": request_path}) from e

        if not is_file:
            raise AssetNotFoundError("File not found", {"path": request_path})

        return candidate

    def respond(self, request_path: str) -> FileResponse:
        """Build a streaming file response for a URL path.

        Raises:
            AssetForbiddenError: If the path escapes the asset root
            AssetNotFoundError: If no regular file exists at the path
        """
        path = self.resolve(request_path)
        return FileResponse(path, media_type=mime_type(path))
