"""QR code rendering for short links."""

import base64
import io
import logging

import qrcode
from qrcode.exceptions import DataOverflowError
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.services.exceptions import RenderingError

logger = logging.getLogger(__name__)


class QRCodeRenderer:
    """Renders text (normally a short URL) as a PNG QR code."""

    def __init__(self, box_size: int = None, border: int = None):
        self.box_size = box_size or settings.QR_BOX_SIZE
        self.border = settings.QR_BORDER if border is None else border

    def render_png(self, data: str) -> bytes:
        """
        Render ``data`` as PNG bytes.

        Raises:
            RenderingError: If the data cannot be encoded or the image cannot be written
        """
        try:
            qr = qrcode.QRCode(
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                box_size=self.box_size,
                border=self.border,
            )
            qr.add_data(data)
            qr.make(fit=True)
            img = qr.make_image(fill_color="black", back_color="white")
            buf = io.BytesIO()
            img.save(buf, format="PNG")
            return buf.getvalue()
        except (DataOverflowError, ValueError, OSError) as e:
            logger.error(f"Failed to render QR code: {e}")
            raise RenderingError("Failed to generate QR code") from e

    def render_data_uri(self, data: str) -> str:
        """Render ``data`` as a ``data:image/png;base64,...`` URI."""
        png = self.render_png(data)
        return "data:image/png;base64," + base64.b64encode(png).decode("ascii")

    async def render_data_uri_async(self, data: str) -> str:
        """Render off the event loop; image encoding is CPU bound."""
        return await run_in_threadpool(self.render_data_uri, data)
