import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from itemdb.config import APP_VERSION, HOST, LOG_FORMAT, LOG_LEVEL, PORT
from itemdb.routes.items import router as items_router
from itemdb.schemas import Health
from itemdb.storage import ItemStore

logger = logging.getLogger(__name__)


async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        f"{exc.detail}\n",
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(store: Optional[ItemStore] = None) -> FastAPI:
    app = FastAPI(
        title="Item DB",
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store if store is not None else ItemStore()
    app.include_router(items_router)
    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)

    @app.get("/health", response_model=Health)
    async def health():
        return {"status": "ok", "version": APP_VERSION}

    return app


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="In-memory item price store over HTTP")
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Bind port (default: {PORT})")
    parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Log level (default: {LOG_LEVEL})")
    return parser.parse_args(argv)


def run(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    app = create_app()
    logger.info("Server started at %s:%d", args.host, args.port)
    # uvicorn logs a bind failure and exits the process with a non-zero status.
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
