# card_svg.py
# SVG-Vorlage fuer die Zitatkarte (TokyoNight) + Fehlerbild.

from typing import List, Optional

from errors import ComposeFailure
from logic import CardCfg, Theme, THEME, PLACEHOLDER_AUTHOR

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

def escape_xml(s: str) -> str:
    return "".join(_XML_ESCAPES.get(ch, ch) for ch in (s or ""))

SVG_TEMPLATE = """<svg
  width="{width}"
  height="{height}"
  viewBox="0 0 {width} {height}"
  fill="none"
  xmlns="http://www.w3.org/2000/svg"
  role="img"
  aria-labelledby="title desc"
>
  <title id="title">Daily Developer Quote</title>
  <desc id="desc">Philosophical quote updated daily</desc>

  <style><![CDATA[
    rect.background {{
      fill: {bg};
      rx: 12;
      ry: 12;
    }}
    text.quote {{
      font-family: 'Segoe UI', sans-serif;
      font-size: {quote_size}px;
      fill: {c_quote};
      font-weight: 600;
      dominant-baseline: middle;
    }}
    text.author {{
      font-family: 'Segoe UI', sans-serif;
      font-size: {author_size}px;
      fill: {c_author};
      font-weight: 500;
    }}
    .work {{
      font-style: italic;
    }}
    text.year {{
      font-family: 'Segoe UI', sans-serif;
      font-size: {year_size}px;
      fill: {c_year};
      text-anchor: end;
    }}
  ]]></style>

  <rect class="background" width="{width}" height="{height}" />

  <text x="{mx}" y="{pad_top}" class="quote">{tspans}</text>

  <text x="{mx}" y="{footer_y}" class="author">{author_line}</text>
{year_el}</svg>
"""

FALLBACK_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="400" height="60" fill="red">
  <text x="10" y="30" font-family="Arial" font-size="14">{message}</text>
</svg>
"""

def compose_svg(
    lines: List[str],
    author: str,
    work: Optional[str] = None,
    year: Optional[str] = None,
    theme: Theme = THEME,
    cfg: Optional[CardCfg] = None,
) -> str:
    """
    Baut die SVG-Karte aus bereits umbrochenen Zitatzeilen.

    Die Hoehe waechst linear mit der Zeilenzahl. Werk und Jahr fallen
    ganz weg, wenn sie fehlen. Jeder Text aus der API wird escaped.
    """
    cfg = cfg or CardCfg()
    try:
        n = len(lines)
        height = cfg.height_for(n)
        tspans = "".join(
            f'<tspan x="{cfg.margin_x}" dy="{0 if i == 0 else cfg.line_height}">{escape_xml(ln)}</tspan>'
            for i, ln in enumerate(lines)
        )
        author_line = f"— {escape_xml(author or PLACEHOLDER_AUTHOR)}"
        if work:
            author_line += f', <tspan class="work">{escape_xml(work)}</tspan>'
        footer_y = height - 36
        year_el = ""
        if year:
            year_el = f'  <text x="{cfg.width - cfg.margin_x}" y="{footer_y}" class="year">{escape_xml(year)}</text>\n'

        return SVG_TEMPLATE.format(
            width=cfg.width,
            height=height,
            bg=escape_xml(theme.background),
            c_quote=escape_xml(theme.quote),
            c_author=escape_xml(theme.author),
            c_year=escape_xml(theme.year),
            quote_size=cfg.quote_size_for(n),
            author_size=cfg.author_size,
            year_size=cfg.year_size,
            mx=cfg.margin_x,
            pad_top=cfg.pad_top,
            tspans=tspans,
            footer_y=footer_y,
            author_line=author_line,
            year_el=year_el,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise ComposeFailure(f"SVG compose failed: {e}") from e

def fallback_svg(message: str = "Error loading quote.") -> str:
    return FALLBACK_SVG.format(message=escape_xml(message))
