# ticket_export.py
"""
Ticket / call history exports: DataFrames for CSV, PNG images, ZIP of PNGs.
"""

import io
import logging
import zipfile
from typing import Dict, List, Optional

import pandas as pd
from PIL import Image, ImageDraw, ImageFont

from number_caller import NumberCall
from settings import FONT_PATH, TICKET_COLS, TICKET_IMG_H, TICKET_IMG_W, TICKET_ROWS
from ticket_generator import MarkedState, Ticket

logger = logging.getLogger(__name__)

MARKED_FILL = (223, 243, 255)


def tickets_to_dataframe(tickets: Dict[str, Ticket]) -> pd.DataFrame:
    rows = []
    for tid, grid in tickets.items():
        nums = [str(n) for row in grid for n in row if n is not None]
        rows.append({"ticket_id": tid, "numbers": ",".join(nums)})
    return pd.DataFrame(rows, columns=["ticket_id", "numbers"])


def call_history_dataframe(history: List[NumberCall]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"call_index": c.call_index, "number": c.number, "timestamp": c.timestamp} for c in history],
        columns=["call_index", "number", "timestamp"],
    )
    return df


def _load_fonts():
    if FONT_PATH:
        try:
            return ImageFont.truetype(FONT_PATH, 18), ImageFont.truetype(FONT_PATH, 16)
        except OSError:
            logger.warning("Could not load font %s, using default", FONT_PATH)
    default = ImageFont.load_default()
    return default, default


def render_ticket_image(grid: Ticket, ticket_id: str, marked: Optional[MarkedState] = None) -> io.BytesIO:
    img = Image.new("RGB", (TICKET_IMG_W, TICKET_IMG_H), color=(255,255,255))
    draw = ImageDraw.Draw(img)
    header_font, cell_font = _load_fonts()

    draw.text((10,6), f"Ticket {ticket_id}", font=header_font, fill=(0,0,0))
    left, top = 10, 40
    cw = (TICKET_IMG_W - left*2)//TICKET_COLS
    ch = (TICKET_IMG_H - top - 10)//TICKET_ROWS
    for r in range(TICKET_ROWS):
        for c in range(TICKET_COLS):
            x0 = left + c*cw; y0 = top + r*ch; x1 = x0+cw; y1 = y0+ch
            v = grid[r][c]
            fill = MARKED_FILL if (v is not None and marked and marked[r][c]) else None
            draw.rectangle([x0,y0,x1,y1], outline=(200,200,200), fill=fill, width=1)
            if v is not None:
                txt = str(v)
                bbox = draw.textbbox((0,0), txt, font=cell_font)
                w, h = bbox[2]-bbox[0], bbox[3]-bbox[1]
                draw.text((x0 + (cw-w)/2, y0 + (ch-h)/2), txt, font=cell_font, fill=(0,0,0))
    buf = io.BytesIO(); img.save(buf, format="PNG"); buf.seek(0); return buf


def create_tickets_zip(tickets: Dict[str, Ticket]) -> io.BytesIO:
    mem = io.BytesIO()
    with zipfile.ZipFile(mem, "w") as zf:
        for tid, grid in tickets.items():
            b = render_ticket_image(grid, tid)
            zf.writestr(f"{tid}.png", b.read())
    mem.seek(0)
    logger.debug("Packed %d ticket images", len(tickets))
    return mem
