from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from contextlib import asynccontextmanager
from .routers.hex import hex_controller

controllers = [hex_controller]

async def on_startup():
    for controller in controllers:
        await controller.on_startup()

async def on_shutdown():
    for controller in controllers:
        await controller.on_shutdown()

@asynccontextmanager
async def lifespan(router : FastAPI):
    await on_startup()
    yield
    await on_shutdown()

app = FastAPI(
    title='HexMap API',
    description='API providing H3 hexagon grids for the visible area of a map.',
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex='http://.*',
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=100)

@app.get("/", include_in_schema=False)
async def read_root():
    return RedirectResponse('/docs')

app.include_router(hex_controller.router)
