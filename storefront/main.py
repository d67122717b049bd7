import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.api import admin, auth, blog, cart, orders, products
from storefront.core.config import APP_NAME, CORS_ORIGINS, LOG_LEVEL, SEED_DEMO_DATA
from storefront.db.seed import seed_demo_data
from storefront.db.storage import get_storage

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if SEED_DEMO_DATA:
        seed_demo_data(get_storage())
    logger.info(f"{APP_NAME} started")
    yield

app = FastAPI(title=APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body")
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(cart.router, prefix="/api/cart", tags=["cart"])
app.include_router(orders.router, prefix="/api", tags=["orders"])
app.include_router(blog.router, prefix="/api/blog", tags=["blog"])

@app.get("/")
def root():
    return {"status": "ok", "app": APP_NAME}
