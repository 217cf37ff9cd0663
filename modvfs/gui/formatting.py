# ==============================================================================
# BROWSER FORMATTING HELPERS
# ==============================================================================
# Qt-free helpers used by the VFS browser to describe and preview files.
# Kept apart from the widgets so they can be used (and tested) without a
# display.
# ==============================================================================

import os
from typing import Iterable, Optional


IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tga', '.webp', '.ico')

TEXT_EXTENSIONS = (
    '.txt', '.ini', '.cfg', '.conf', '.json', '.xml', '.csv', '.log', '.md',
    '.lua', '.py', '.yaml', '.yml', '.html', '.htm', '.css', '.js', '.shader',
)

# Tried in order when previewing text whose encoding is unknown
PREVIEW_ENCODINGS = ('utf-8', 'latin-1')


def format_size(size: int) -> str:
    """Format a byte count for display (e.g., "24.0 KB")."""
    if size < 1024:
        return f"{size} B"
    size_kb = size / 1024
    if size_kb < 1024:
        return f"{size_kb:.1f} KB"
    return f"{size_kb / 1024:.1f} MB"


def format_hex_dump(data: bytes, limit: int = 256) -> str:
    """
    Format the start of a byte string as a hex dump.

    Each line shows the offset, up to 16 bytes in hex and their printable
    ASCII form. If the data is longer than ``limit`` a trailing line says how
    many bytes were left out.

    Args:
        data: Raw bytes
        limit: Maximum number of bytes to dump

    Returns:
        Multi-line string (empty for empty data)
    """
    preview_size = min(limit, len(data))
    preview_data = data[:preview_size]

    hex_lines = []
    for i in range(0, preview_size, 16):
        chunk = preview_data[i:i+16]
        hex_str = ' '.join(f'{b:02x}' for b in chunk)
        ascii_str = ''.join(chr(b) if 32 <= b < 127 else '.' for b in chunk)
        hex_lines.append(f"{i:04x}: {hex_str:<48} {ascii_str}")

    if len(data) > preview_size:
        hex_lines.append(f"\n... ({len(data) - preview_size:,} more bytes)")

    return '\n'.join(hex_lines)


def decode_preview_text(data: bytes, limit: int = 10000,
                        encodings: Iterable[str] = PREVIEW_ENCODINGS) -> Optional[str]:
    """
    Decode bytes for a text preview, truncating long text.

    Returns:
        Decoded text, or None if no encoding could decode it
    """
    for encoding in encodings:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        if len(text) > limit:
            text = text[:limit] + "\n\n... (truncated)"
        return text
    return None


def is_image_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in IMAGE_EXTENSIONS


def is_text_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in TEXT_EXTENSIONS
