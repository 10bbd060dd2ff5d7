from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routing_routes import router as routing_router
from config import get_settings
from core.provider_registry import register_providers
from contextlib import asynccontextmanager


@asynccontextmanager
async def lifespan(app: FastAPI):
    register_providers()
    yield


app = FastAPI(title="Distance & Route Engine", lifespan=lifespan)

# CORS (adjust for your frontend)
origins = get_settings().CORS_ALLOW_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routes
app.include_router(routing_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
