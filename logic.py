# logic.py — config, text wrapping and PNG rendering for the quote card

import os, io, json, sys
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo
from typing import Callable, List, Optional

from PIL import Image, ImageDraw, ImageFont

from errors import ComposeFailure

# ----------------- Konfiguration -----------------

SETTINGS_FILE = os.getenv("SETTINGS_FILE", "settings.json")

def log(*a):
    print("[quotecard]", *a, file=sys.stdout, flush=True)

def _load_settings() -> dict:
    if not os.path.exists(SETTINGS_FILE):
        return {}
    try:
        with open(SETTINGS_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            log("⚠️ settings file is not a JSON object, ignoring:", SETTINGS_FILE)
            return {}
        log("📥 settings geladen aus", SETTINGS_FILE)
        return data
    except (OSError, ValueError) as e:
        log("❌ settings laden fehlgeschlagen:", repr(e))
        return {}

SETTINGS = _load_settings()

def cfg_get(name: str, default=None):
    # settings.json > ENV > default
    if name in SETTINGS:
        return SETTINGS[name]
    return os.getenv(name, default)

def cfg_get_int(name: str, default: int) -> int:
    try:
        return int(cfg_get(name, default))
    except (TypeError, ValueError):
        return default

def cfg_get_float(name: str, default: float) -> float:
    try:
        return float(cfg_get(name, default))
    except (TypeError, ValueError):
        return default

PHILOSOPHERS_API = str(cfg_get("PHILOSOPHERS_API", "https://philosophersapi.com")).rstrip("/")
HTTP_TIMEOUT = cfg_get_float("QUOTE_HTTP_TIMEOUT", 5.0)
TZ = ZoneInfo(str(cfg_get("QUOTE_TIMEZONE", "UTC")))
QUOTE_POLICY = str(cfg_get("QUOTE_POLICY", "day_of_year")).lower()
CACHE_TTL_SECONDS = cfg_get_int("CACHE_TTL_SECONDS", 300)
PORT = cfg_get_int("PORT", 3000)

PLACEHOLDER_AUTHOR = "Unknown Philosopher"
PLACEHOLDER_QUOTE = "No quote found."
PLACEHOLDER_WORK = "Unknown Work"
PLACEHOLDER_YEAR = "Unknown Year"

# ----------------- Zeit -----------------

def today() -> date:
    return datetime.now(TZ).date()

def seconds_until_midnight(now: Optional[datetime] = None) -> int:
    now = now or datetime.now(TZ)
    midnight = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    return max(0, int((midnight - now).total_seconds()))

# ----------------- Theme & Layout -----------------

@dataclass(frozen=True)
class Theme:
    background: str = "#1a1b26"
    quote: str = "#c0caf5"
    author: str = "#7aa2f7"
    year: str = "#f7768e"

    @classmethod
    def from_settings(cls) -> "Theme":
        base = cls()
        return cls(
            background=cfg_get("THEME_BG", base.background),
            quote=cfg_get("THEME_QUOTE", base.quote),
            author=cfg_get("THEME_AUTHOR", base.author),
            year=cfg_get("THEME_YEAR", base.year),
        )

# TokyoNight, einmal beim Import festgelegt
THEME = Theme.from_settings()

class CardCfg:
    def __init__(self):
        self.width = cfg_get_int("CARD_WIDTH", 740)
        self.pad_top = cfg_get_int("CARD_PAD_TOP", 40)
        self.pad_bottom = cfg_get_int("CARD_PAD_BOTTOM", 70)
        self.line_height = cfg_get_int("CARD_LINE_HEIGHT", 28)
        self.margin_x = cfg_get_int("CARD_MARGIN_X", 40)
        self.wrap_chars = cfg_get_int("CARD_WRAP_CHARS", 38)

        self.quote_size = cfg_get_int("CARD_QUOTE_SIZE", 26)
        self.quote_size_small = cfg_get_int("CARD_QUOTE_SIZE_SMALL", 22)
        self.small_after_lines = cfg_get_int("CARD_SMALL_AFTER_LINES", 5)
        self.author_size = cfg_get_int("CARD_AUTHOR_SIZE", 18)
        self.year_size = cfg_get_int("CARD_YEAR_SIZE", 16)

        self.quote_font_name = cfg_get("CARD_QUOTE_FONT", "DejaVuSans-Bold.ttf")
        self.author_font_name = cfg_get("CARD_AUTHOR_FONT", "DejaVuSans.ttf")
        self.work_font_name = cfg_get("CARD_WORK_FONT", "DejaVuSans-Oblique.ttf")

    def quote_size_for(self, line_count: int) -> int:
        return self.quote_size_small if line_count > self.small_after_lines else self.quote_size

    def height_for(self, line_count: int) -> int:
        return self.pad_top + line_count * self.line_height + self.pad_bottom

# ----------------- Fonts & Text Helpers -----------------

def _safe_font(path_or_name: str, size: int) -> ImageFont.ImageFont:
    # 1) Expliziter Pfad / Name
    try:
        return ImageFont.truetype(path_or_name, size=size)
    except OSError:
        pass
    # 2) System-Alternativen
    candidates = [
        "DejaVuSans.ttf",
        "Arial.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for cand in candidates:
        try:
            return ImageFont.truetype(cand, size=size)
        except OSError:
            continue
    # 3) Letzter Ausweg
    return ImageFont.load_default(size=size)

def text_length(text: str, font: ImageFont.ImageFont) -> int:
    try:
        return int(font.getlength(text))
    except AttributeError:
        bbox = font.getbbox(text)
        return bbox[2] - bbox[0]

def _x_for_align(text: str, font: ImageFont.ImageFont,
                 width: int, align: str, ml: int, mr: int) -> int:
    usable = width - ml - mr
    tl = text_length(text, font)
    if align == "center":
        return ml + max(0, (usable - tl) // 2)
    if align == "right":
        return width - mr - tl
    return ml

# ----------------- Umbruch -----------------

def wrap(text: str, fits: Callable[[str], bool]) -> List[str]:
    """
    Gieriger Zeilenumbruch ueber durch Leerraum getrennte Woerter.

    Ein Wort wird an die aktuelle Zeile gehaengt, solange ``fits`` das
    Ergebnis akzeptiert; sonst wird die Zeile ausgegeben und das Wort
    beginnt die naechste. Woerter werden nie getrennt: ein Wort, das allein
    nicht passt, steht allein auf einer zu langen Zeile.
    Leere Eingabe -> leere Liste.
    """
    lines: List[str] = []
    cur = ""
    for w in (text or "").split():
        cand = f"{cur} {w}" if cur else w
        if fits(cand):
            cur = cand
        elif cur:
            lines.append(cur)
            cur = w
        else:
            cur = w
    if cur:
        lines.append(cur)
    return lines

def wrap_chars(text: str, max_chars: int = 38) -> List[str]:
    return wrap(text, lambda s: len(s) <= max_chars)

def wrap_px(text: str, font: ImageFont.ImageFont, max_px: int,
            measure: Callable[[str, ImageFont.ImageFont], int] = text_length) -> List[str]:
    return wrap(text, lambda s: measure(s, font) <= max_px)

# ----------------- PNG Render -----------------

def layout_quote_lines(text: str, cfg: CardCfg,
                       measure: Callable[[str, ImageFont.ImageFont], int] = text_length):
    """Umbruch mit der normalen Zitatschrift, bei langen Zitaten mit der kleinen."""
    max_w = cfg.width - 2 * cfg.margin_x
    font = _safe_font(cfg.quote_font_name, cfg.quote_size)
    lines = wrap_px(text, font, max_w, measure)
    if len(lines) > cfg.small_after_lines:
        font = _safe_font(cfg.quote_font_name, cfg.quote_size_small)
        lines = wrap_px(text, font, max_w, measure)
    return lines, font

def render_quote_card(
    text: str,
    author: str,
    work: Optional[str] = None,
    year: Optional[str] = None,
    theme: Theme = THEME,
    cfg: Optional[CardCfg] = None,
) -> Image.Image:
    cfg = cfg or CardCfg()
    try:
        lines, font_quote = layout_quote_lines(text or PLACEHOLDER_QUOTE, cfg)
        font_author = _safe_font(cfg.author_font_name, cfg.author_size)
        font_work = _safe_font(cfg.work_font_name, cfg.author_size)
        font_year = _safe_font(cfg.author_font_name, cfg.year_size)

        total_h = cfg.height_for(len(lines))
        img = Image.new("RGBA", (cfg.width, total_h), color=(0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.rounded_rectangle((0, 0, cfg.width - 1, total_h - 1), radius=12, fill=theme.background)

        y = cfg.pad_top
        for ln in lines:
            x = _x_for_align(ln, font_quote, cfg.width, "center", cfg.margin_x, cfg.margin_x)
            draw.text((x, y), ln, fill=theme.quote, font=font_quote)
            y += cfg.line_height

        # Autor + Werk in einer Zeile, Werk kursiv
        author_part = f"— {author or PLACEHOLDER_AUTHOR}, "
        work_part = work or PLACEHOLDER_WORK
        full_w = text_length(author_part, font_author) + text_length(work_part, font_work)
        x = cfg.margin_x + max(0, (cfg.width - 2 * cfg.margin_x - full_w) // 2)
        y = total_h - cfg.pad_bottom + 12
        draw.text((x, y), author_part, fill=theme.author, font=font_author)
        draw.text((x + text_length(author_part, font_author), y), work_part, fill=theme.author, font=font_work)

        year_s = year or PLACEHOLDER_YEAR
        y += cfg.author_size + 6
        x = _x_for_align(year_s, font_year, cfg.width, "center", cfg.margin_x, cfg.margin_x)
        draw.text((x, y), year_s, fill=theme.year, font=font_year)
        return img
    except (OSError, ValueError, TypeError) as e:
        raise ComposeFailure(f"PNG render failed: {e}") from e

def render_fallback_png(message: str = "Error loading quote.") -> Image.Image:
    img = Image.new("RGB", (400, 60), color="white")
    draw = ImageDraw.Draw(img)
    draw.text((10, 22), message, fill="red", font=_safe_font("Arial.ttf", 14))
    return img

def pil_to_png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()
