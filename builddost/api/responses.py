"""Response helpers shared by routers."""

from fastapi import Response


def zip_response(content: bytes, filename: str) -> Response:
    """Archive bytes served as a download."""
    return Response(
        content=content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
