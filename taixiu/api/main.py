from fastapi import FastAPI
from contextlib import asynccontextmanager
from taixiu.config import settings
from taixiu.core.log import setup_logging
from taixiu.api.routes import router

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, structured=settings.log_json)
    yield

app = FastAPI(title="TaiXiu Oracle", lifespan=lifespan)
app.include_router(router)

@app.get("/")
def home():
    return {"ok": True, "app": "TaiXiu Oracle", "use": "/api/custom"}
