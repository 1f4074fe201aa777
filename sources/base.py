from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from errors import UpstreamFailure


def _opt(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    work: Optional[str] = None
    year: Optional[str] = None
    philosopher_id: Optional[str] = None

    @classmethod
    def from_api(cls, obj: Any) -> "Quote":
        """
        Akzeptiert ein Element der Zitatliste:
          {"quote": "...", "work": "...", "year": "...", "philosopher": {"id": "..."}}
        """
        if not isinstance(obj, dict):
            raise UpstreamFailure(f"quote item is not an object: {type(obj).__name__}")
        ph = obj.get("philosopher")
        pid = ph.get("id") if isinstance(ph, dict) else None
        return cls(
            text=_opt(obj.get("quote") or obj.get("text")) or "",
            work=_opt(obj.get("work")),
            year=_opt(obj.get("year")),
            philosopher_id=_opt(pid or obj.get("philosopherId")),
        )


class PhilosopherLookup(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    ok: bool = True
    error: Optional[str] = None


class QuoteSource(Protocol):
    async def fetch_quotes(self) -> list: ...

    async def fetch_philosopher(self, philosopher_id: Optional[str]) -> PhilosopherLookup: ...
