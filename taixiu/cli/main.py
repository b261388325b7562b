import typer
import requests
import os


app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")
TIMEOUT = float(os.getenv("API_TIMEOUT", 30))


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


def _get(path: str, **params):
    r = requests.get(f"{BASE}{path}", params=params or None, headers=_headers(), timeout=TIMEOUT)
    typer.echo(r.json())


@app.command()
def predict():
    """Run one prediction cycle on the server."""
    _get("/api/custom")


@app.command()
def history(limit: int = typer.Option(50, help="number of trailing rounds")):
    _get("/debug/history", limit=limit)


@app.command()
def patterns():
    _get("/debug/pattern")


@app.command()
def stats():
    _get("/debug/stats")


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    from taixiu.config import settings
    from taixiu.core.log import setup_logging

    setup_logging(settings.log_level, structured=settings.log_json)
    uvicorn.run("taixiu.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
