# routes_quotes.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from card_svg import compose_svg, fallback_svg
from errors import QuoteCardError
from logic import (
    log, wrap_chars, render_quote_card, render_fallback_png, pil_to_png_bytes,
    seconds_until_midnight, CardCfg, THEME, QUOTE_POLICY, CACHE_TTL_SECONDS,
    PLACEHOLDER_QUOTE,
)
from selection import POLICIES, select_index
from sources.base import Quote, QuoteSource
from sources.philosophers import Source

router = APIRouter()

Fmt = Literal["svg", "png", "json"]

MEDIA_TYPES = {"svg": "image/svg+xml", "png": "image/png", "json": "application/json"}

NO_STORE = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

if QUOTE_POLICY in POLICIES:
    DEFAULT_POLICY = QUOTE_POLICY
else:
    log(f"⚠️ QUOTE_POLICY={QUOTE_POLICY!r} unbekannt, nutze 'day_of_year'")
    DEFAULT_POLICY = "day_of_year"

def get_source() -> QuoteSource:
    return Source()

def _resolve_format(fmt: Optional[str], request: Request) -> str:
    if fmt:
        return fmt
    accept = request.headers.get("accept", "")
    if "image/png" in accept and "image/svg+xml" not in accept:
        return "png"
    return "svg"

def cache_headers(policy: str) -> dict:
    # Zufall darf nie gecacht werden, Tageszitat hoechstens bis Mitternacht
    if policy == "random":
        return dict(NO_STORE)
    ttl = min(CACHE_TTL_SECONDS, seconds_until_midnight())
    return {"Cache-Control": f"public, max-age={ttl}"}

async def build_card(source: QuoteSource, policy: str) -> dict:
    quotes = await source.fetch_quotes()
    idx = select_index(policy, len(quotes))
    quote = Quote.from_api(quotes[idx])
    who = await source.fetch_philosopher(quote.philosopher_id)
    return {"index": idx, "quote": quote, "author": who.name, "author_found": who.ok}

def _render(card: dict, fmt: str, policy: str) -> Response:
    cfg = CardCfg()
    quote: Quote = card["quote"]
    text = quote.text or PLACEHOLDER_QUOTE
    headers = cache_headers(policy)

    if fmt == "png":
        img = render_quote_card(text, card["author"], quote.work, quote.year, THEME, cfg)
        return Response(pil_to_png_bytes(img), media_type=MEDIA_TYPES["png"], headers=headers)

    lines = wrap_chars(text, cfg.wrap_chars)
    if fmt == "json":
        return JSONResponse({
            "ok": True,
            "policy": policy,
            "index": card["index"],
            "quote": quote.model_dump(),
            "author": card["author"],
            "author_found": card["author_found"],
            "lines": lines,
        }, headers=headers)

    svg = compose_svg(lines, card["author"], quote.work, quote.year, THEME, cfg)
    return Response(svg, media_type=MEDIA_TYPES["svg"], headers=headers)

def _error_response(fmt: str, message: str) -> Response:
    if fmt == "json":
        return JSONResponse({"ok": False, "error": message}, status_code=500, headers=NO_STORE)
    if fmt == "png":
        body = pil_to_png_bytes(render_fallback_png())
        return Response(body, status_code=500, media_type=MEDIA_TYPES["png"], headers=NO_STORE)
    return Response(fallback_svg(), status_code=500, media_type=MEDIA_TYPES["svg"], headers=NO_STORE)

async def serve_quote(request: Request, source: QuoteSource, policy: str, fmt: Optional[str]) -> Response:
    """
    Holen, auswaehlen, umbrechen, rendern.
    Jeder Fehler endet als 500 mit kleinem Fehlerbild im angefragten
    Format, da der Endpunkt meist als <img src=...> eingebunden ist.
    """
    fmt = _resolve_format(fmt, request)
    try:
        card = await build_card(source, policy)
        return _render(card, fmt, policy)
    except QuoteCardError as e:
        log(f"❌ {request.url.path} ({policy}/{fmt}) {type(e).__name__}: {e}")
        return _error_response(fmt, str(e) or type(e).__name__)
    except Exception as e:
        log(f"❌ {request.url.path} ({policy}/{fmt}) unerwarteter Fehler:", repr(e))
        return _error_response(fmt, "internal error")

@router.get("/api/philosopher-quote")
async def philosopher_quote(request: Request, format: Optional[Fmt] = None,
                            source: QuoteSource = Depends(get_source)):
    return await serve_quote(request, source, DEFAULT_POLICY, format)

@router.get("/api/quote-of-the-day")
async def quote_of_the_day(request: Request, format: Optional[Fmt] = None,
                           source: QuoteSource = Depends(get_source)):
    return await serve_quote(request, source, "date_hash", format)

@router.get("/api/random-quote")
async def random_quote(request: Request, format: Optional[Fmt] = None,
                       source: QuoteSource = Depends(get_source)):
    return await serve_quote(request, source, "random", format)
