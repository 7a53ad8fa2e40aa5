"""
QR code rendering for tickets.

The payload is the bare ticketId. Error correction H keeps printed or
phone-screen codes readable when partially damaged.
"""

import base64
import io
from typing import Any

import qrcode
from qrcode.constants import ERROR_CORRECT_H


class TicketQRCodeGenerator:
    """Renders ticket QR codes as PNG"""

    def __init__(self, box_size: int = 10, border: int = 2):
        self.box_size = box_size
        self.border = border

    def build(self, ticket_id: str) -> qrcode.QRCode:
        payload = (ticket_id or '').strip()
        if not payload:
            raise ValueError('Ticket id is required for QR generation')

        qr = qrcode.QRCode(
            version=1,  # grows to fit the payload
            error_correction=ERROR_CORRECT_H,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        return qr

    def generate_png(self, ticket_id: str) -> bytes:
        img = self.build(ticket_id).make_image(fill_color='black', back_color='white')

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return buffer.getvalue()

    def generate(self, ticket_id: str) -> dict[str, Any]:
        """
        Generate QR code for a ticket

        Returns:
            Dict with base64 PNG, data URL and the encoded payload
        """
        png_bytes = self.generate_png(ticket_id)
        img_base64 = base64.b64encode(png_bytes).decode('utf-8')

        return {
            'qr_code_base64': img_base64,
            'qr_code_data_url': f'data:image/png;base64,{img_base64}',
            'payload': ticket_id.strip(),
        }

    def generate_data_url(self, ticket_id: str) -> str:
        return self.generate(ticket_id)['qr_code_data_url']
