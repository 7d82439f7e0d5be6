import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from quote_relay.api.schemas import ErrorResponse, QuoteRequest, QuoteResponse
from quote_relay.config import Settings, get_settings
from quote_relay.errors import QuoteError
from quote_relay.service.quote import QuoteService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: Settings, quote_service: QuoteService) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_: FastAPI):
        quote_service.settings.require_api_key()
        logger.info("startup model=%s", quote_service.settings.gemini_model)
        yield

    app = FastAPI(title="quote-relay", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        details = str(errors[0].get("msg", "")) if errors else ""
        return JSONResponse(status_code=400, content={"error": "Invalid request body.", "details": details})

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.post(
        "/api/get-quote",
        response_model=QuoteResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def get_quote(req: QuoteRequest | None = Body(default=None)):
        # An empty body is treated like {} so the topic check reports it.
        req = req or QuoteRequest()
        try:
            quote = await quote_service.get_quote(req.topic, req.language)
        except QuoteError as exc:
            return JSONResponse(status_code=exc.status_code, content=exc.as_payload())
        except Exception as exc:
            logger.exception("quote.failed topic=%s", req.topic)
            return JSONResponse(
                status_code=500,
                content={"error": "An internal server error occurred.", "details": str(exc)},
            )
        return QuoteResponse(quote=quote.text)

    # Mounted last so the API routes take precedence over the catch-all mount.
    if Path(settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    return app


settings = get_settings()
service = QuoteService(settings)
app = create_app(settings, service)
