from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

import qrcode
from PIL import Image, ImageDraw, ImageFont

from ..models.config_models import LabelSettings
from ..models.label_view import LabelView

"""Tag rasterization with Pillow and qrcode.

Produces one fixed-size bitmap per LabelView. Geometry is expressed in label
units (default 378x189) and multiplied by LabelSettings.raster_scale.

Layout (label units):
- text block top-left, bold, wrapped onto further lines (never clipped)
- QR code (error correction H) 40 from the top, 32 from the right
- "Order Id: ..." right-aligned 32 from the right, 44 from the bottom
- text lines that share a vertical band with the QR code or the order id
  stop GAP units left of it
- when the wrapped block does not fit the label height the font shrinks,
  down to MIN_FONT_SIZE
"""

__all__ = [
    "LabelLayout",
    "display_case",
    "layout_label",
    "make_qr_image",
    "render_label_image",
]

logger = logging.getLogger(__name__)

PREFERRED_BOLD = ["DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "LiberationSans-Bold.ttf"]

QR_TOP = 40
QR_RIGHT = 32
ORDER_ID_RIGHT = 32
ORDER_ID_BOTTOM = 44
LINE_HEIGHT = 1.5  # em
GAP = 6
MIN_FONT_SIZE = 7

# 区切りの優先順: " | " で分割できればフィールド単位、次に単語単位
BREAK_SEPARATORS = (" | ", " ")

Box = tuple[int, int, int, int]


@dataclass
class LabelLayout:
    """Pixel positions of everything drawn on one tag."""
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont
    lines: list[tuple[tuple[int, int], str]] = field(default_factory=list)
    order_id_xy: tuple[int, int] = (0, 0)
    order_id_text: str = ""
    qr_box: Box = (0, 0, 0, 0)
    fits: bool = True


@lru_cache(maxsize=32)
def get_font(size_px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for name in PREFERRED_BOLD:
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    logger.debug("no bold TrueType font found, using Pillow default font")
    return ImageFont.load_default(size=size_px)


def display_case(text: str) -> str:
    """Upper-case the first letter of each space separated word, leave the rest."""
    return " ".join(w[:1].upper() + w[1:] for w in text.split(" "))


def _split_line(draw: ImageDraw.ImageDraw, text: str, font, max_width: float) -> tuple[str, str]:
    """Longest head of text that fits max_width, and the remainder.

    Breaks at " | " first, then at spaces; a single word wider than the line
    is broken between characters. The head is never empty.
    """
    if draw.textlength(text, font=font) <= max_width:
        return text, ""
    for sep in BREAK_SEPARATORS:
        parts = text.split(sep)
        if len(parts) < 2 or draw.textlength(parts[0], font=font) > max_width:
            continue
        n = 1
        while n < len(parts) and draw.textlength(sep.join(parts[: n + 1]), font=font) <= max_width:
            n += 1
        return sep.join(parts[:n]), sep.join(parts[n:])
    n = 1
    while n < len(text) and draw.textlength(text[: n + 1], font=font) <= max_width:
        n += 1
    return text[:n], text[n:]


def _right_limit(top: int, bottom: int, obstacles: list[Box], default: int, gap: int) -> int:
    limit = default
    for left, o_top, _right, o_bottom in obstacles:
        if top < o_bottom and bottom > o_top:
            limit = min(limit, left - gap)
    return limit


def _text_lines(view: LabelView, settings: LabelSettings) -> list[str]:
    return [
        f"Product : {view.product_name}",
        f"Brand: {settings.brand} | SKU: {view.sku}",
        display_case(f"Color: {view.color} | Size: {view.size}"),
        f"MRP: {settings.currency_symbol}{view.price_text} (Incl. of all taxes)",
        settings.net_quantity,
        *settings.manufacturer_lines,
        settings.contact,
    ]


def _place_block(draw, texts, font, *, pad, line_px, obstacles, right_edge, gap):
    placed: list[tuple[tuple[int, int], str]] = []
    y = pad
    for text in texts:
        rest = text
        while True:
            limit = _right_limit(y, y + line_px, obstacles, right_edge, gap)
            head, rest = _split_line(draw, rest, font, limit - pad)
            placed.append(((pad, y), head))
            y += line_px
            if not rest:
                break
    return placed, y


def layout_label(
    draw: ImageDraw.ImageDraw,
    view: LabelView,
    settings: LabelSettings | None = None,
) -> LabelLayout:
    """Compute where every string goes, shrinking the font until the block fits."""
    settings = settings or LabelSettings()
    s = settings.raster_scale
    w_px, h_px = settings.width * s, settings.height * s
    pad, gap = settings.padding * s, GAP * s
    qr_px = settings.qr_size * s
    qr_x, qr_y = w_px - QR_RIGHT * s - qr_px, QR_TOP * s
    qr_box = (qr_x, qr_y, qr_x + qr_px, qr_y + qr_px)
    order_xy = (w_px - ORDER_ID_RIGHT * s, h_px - ORDER_ID_BOTTOM * s)
    order_text = f"Order Id: {view.order_id}"
    texts = _text_lines(view, settings)

    layout = None
    for size in range(settings.font_size, min(MIN_FONT_SIZE, settings.font_size) - 1, -1):
        font = get_font(size * s)
        order_box = draw.textbbox(order_xy, order_text, font=font, anchor="rd")
        lines, bottom = _place_block(
            draw,
            texts,
            font,
            pad=pad,
            line_px=int(size * LINE_HEIGHT * s),
            obstacles=[qr_box, order_box],
            right_edge=w_px - pad,
            gap=gap,
        )
        layout = LabelLayout(font, lines, order_xy, order_text, qr_box, fits=bottom <= h_px - pad)
        if layout.fits:
            return layout

    logger.debug(f"label text for {view.sku} overflows at the smallest font size")
    return layout


def make_qr_image(payload: str, size_px: int) -> Image.Image:
    """QR code for payload, error correction level H, exactly size_px square."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=0,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white").get_image()
    return qr_img.convert("RGB").resize((size_px, size_px), Image.Resampling.NEAREST)


def render_label_image(view: LabelView, settings: LabelSettings | None = None) -> Image.Image:
    """Rasterize one tag to an RGB image of (width*scale, height*scale) pixels."""
    settings = settings or LabelSettings()
    s = settings.raster_scale
    img = Image.new("RGB", (settings.width * s, settings.height * s), (255, 255, 255))
    draw = ImageDraw.Draw(img)
    layout = layout_label(draw, view, settings)

    for xy, text in layout.lines:
        draw.text(xy, text, font=layout.font, fill=(0, 0, 0))

    qr_x, qr_y, qr_right, _ = layout.qr_box
    img.paste(make_qr_image(view.qr_payload, qr_right - qr_x), (qr_x, qr_y))

    draw.text(layout.order_id_xy, layout.order_id_text, font=layout.font, fill=(0, 0, 0), anchor="rd")
    return img
