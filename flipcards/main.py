import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from flipcards.db.session import init_db
from flipcards.routes import flashcards, folders, uploads
from flipcards.utils.config import settings
from flipcards.utils.errors import FlipcardsError

logger = logging.getLogger(__name__)

# Evento para configurar o log e criar tabelas ao iniciar
@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    init_db()
    yield

app = FastAPI(title="Flipcards API", lifespan=lifespan)

app.include_router(flashcards.router)
app.include_router(folders.router)
app.include_router(uploads.router)


@app.exception_handler(FlipcardsError)
async def flipcards_error_handler(request: Request, exc: FlipcardsError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request", "details": "; ".join(problems)},
    )

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Erro inesperado em %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "details": str(exc)},
    )


@app.get("/")
def read_root():
    return {"status": "Flipcards API is running 🚀"}
