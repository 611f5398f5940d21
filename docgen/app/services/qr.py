"""
QR code generation for verification links.
"""

import segno


class QRCodeError(RuntimeError):
    """Raised when a verification QR code cannot be produced."""


def verification_qr_data_uri(data: str, *, scale: int = 5) -> str:
    """
    Encode ``data`` as a PNG QR code and return it as a data URI.

    High error correction and a one-module quiet zone, so the code stays
    scannable when printed small.
    """
    try:
        qr = segno.make_qr(data, error="h")
        return qr.png_data_uri(
            scale=scale,
            border=1,
            dark="#000000",
            light="#ffffff",
        )
    except Exception as exc:
        raise QRCodeError(f"Failed to generate QR code: {exc}") from exc
