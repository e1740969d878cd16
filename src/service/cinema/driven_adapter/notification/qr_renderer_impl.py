import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from src.service.cinema.app.interface.i_qr_renderer import IQrRenderer


class QrCodeRenderer(IQrRenderer):
    """PNG QR codes via qrcode + Pillow, scaled to a fixed pixel size."""

    def __init__(self, *, size_px: int = 256, border: int = 2) -> None:
        self.size_px = size_px
        self.border = border

    def render(self, payload: str) -> bytes:
        if not payload:
            raise ValueError('QR payload is empty')

        qr = qrcode.QRCode(
            version=None,  # auto
            error_correction=ERROR_CORRECT_M,
            box_size=10,
            border=self.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color='black', back_color='white').get_image()
        img = img.resize((self.size_px, self.size_px))

        buf = io.BytesIO()
        img.save(buf, format='PNG')
        return buf.getvalue()
