"""File helpers for design uploads: data URL previews and size formatting."""

import base64


def encode_preview(content: bytes, mime_type: str) -> str:
    """Encode raw file bytes as a base64 data URL.

    The preview is self-contained, so it survives serialization while the
    original binary does not.

    Args:
        content: Raw file bytes
        mime_type: MIME type of the file

    Returns:
        ``data:<mime>;base64,<payload>`` string
    """
    payload = base64.b64encode(content).decode('ascii')
    return f"data:{mime_type};base64,{payload}"


def data_url_size(data_url: str) -> int:
    """Approximate decoded size in bytes of a base64 data URL.

    Args:
        data_url: Data URL string

    Returns:
        Size in bytes, 0 if the string carries no base64 payload
    """
    _, sep, payload = data_url.partition(',')
    if not sep or not payload:
        return 0
    padding = len(payload) - len(payload.rstrip('='))
    return (len(payload) * 3) // 4 - padding


def format_file_size(num_bytes: int) -> str:
    """Human readable file size, e.g. ``1.5 MB``."""
    if num_bytes <= 0:
        return "0 Bytes"
    units = ['Bytes', 'KB', 'MB', 'GB']
    exponent = 0
    while num_bytes >= 1024 ** (exponent + 1) and exponent < len(units) - 1:
        exponent += 1
    value = round(num_bytes / (1024 ** exponent), 2)
    return f"{value:g} {units[exponent]}"
