# main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from logic import log, PHILOSOPHERS_API, PORT, TZ
from routes_quotes import router as quotes_router, DEFAULT_POLICY

# --- Lifecycle & Startup ------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    log(f"🧩 Starte Quote-Card-App … upstream={PHILOSOPHERS_API} policy={DEFAULT_POLICY} tz={TZ.key}")
    yield
    log("👋 App shutdown.")

app = FastAPI(title="Philosopher Quote API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(quotes_router)

# --- Routes: Health / Root ----------------------------------------------------

@app.get("/_health", response_class=PlainTextResponse)
def health():
    return "OK"

@app.get("/")
def ok():
    return {
        "ok": True,
        "policy": DEFAULT_POLICY,
        "routes": ["/api/philosopher-quote", "/api/quote-of-the-day", "/api/random-quote"],
    }

# lokal testen: python main.py
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
