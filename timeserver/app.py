"""
Time Server HTTP application.

Endpoints:
    GET  /                          - Documentation page
    GET  /now/iso/?outtz=Zone       - Current time in the default textual form
    GET  /now/unix/                 - Current unix timestamp
    GET  /now/parsed/?outtz=Zone&date=1&time=1&tz=1
                                    - Current time broken into sections
    POST /convert/timezone/         - Convert a YYYY-MM-DDTHH:MM:SS datetime
    GET  /convert/listtimezones/    - Supported timezone names
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.templating import Jinja2Templates

from . import __version__, converter, datetime_service
from .config import Configuration, default_configuration
from .errors import TimeServerError
from .routes import API_TREE, NOT_FOUND, Handler, build_router, compile_routes
from .timezones import load_timezone_names

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# --------------------------- Endpoints --------------------------------

async def doc_page(request: Request):
    return request.app.state.templates.TemplateResponse(
        request,
        "documentation.html",
        {"routes": request.app.state.routes, "version": __version__},
    )


async def not_found():
    return PlainTextResponse("404 page not found", status_code=404)


async def iso_datetime(outtz: str = ""):
    # Unknown zones answer 200 with an error_message body
    return datetime_service.iso_datetime(outtz)


async def unix_timestamp():
    return datetime_service.unix_timestamp()


async def datetime_parsed(outtz: str = "", date: str = "", time: str = "", tz: str = ""):
    return datetime_service.datetime_parsed(
        outtz,
        send_date=datetime_service.flag_enabled(date),
        send_time=datetime_service.flag_enabled(time),
        send_tz=datetime_service.flag_enabled(tz),
    )


async def convert_timezone(request: Request):
    body = await request.body()
    try:
        conversion = converter.decode_request(body)
        result = converter.convert_timezone(conversion)
    except TimeServerError as e:
        logger.info(f"Conversion rejected: {e}")
        return PlainTextResponse(str(e), status_code=400)

    logger.info(
        f"Converted {conversion.datetime_string} {conversion.from_timezone or 'UTC'} "
        f"-> {result.datetime_string} {conversion.to_timezone or 'UTC'}"
    )
    return result.model_dump(by_alias=True)


async def list_timezones(request: Request):
    return request.app.state.timezones


HANDLERS: Mapping[str, Handler] = {
    "doc_page": (doc_page, ["GET"]),
    NOT_FOUND: (not_found, ALL_METHODS),
    "iso_datetime": (iso_datetime, ["GET"]),
    "unix_timestamp": (unix_timestamp, ["GET"]),
    "datetime_parsed": (datetime_parsed, ["GET"]),
    "convert_timezone": (convert_timezone, ["POST"]),
    "list_timezones": (list_timezones, ["GET"]),
}


# ---------------------------- App factory -----------------------------

def create_app(
    config: Optional[Configuration] = None,
    routes: Optional[Mapping[str, str]] = None,
    timezones: Optional[List[str]] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Validated configuration, defaults when omitted
        routes: Compiled route table {path: handler tag}, the service
            tree when omitted
        timezones: Names served by /convert/listtimezones/, the installed
            timezone database when omitted
    """
    if config is None:
        config = default_configuration()
    if routes is None:
        routes = compile_routes(API_TREE)
    if timezones is None:
        timezones = load_timezone_names()

    # Only the compiled route table is served
    app = FastAPI(
        title="Time Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Read-only after startup
    app.state.config = config
    app.state.routes = dict(routes)
    app.state.timezones = list(timezones)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.include_router(build_router(app.state.routes, HANDLERS))
    logger.info(f"Registered {len(app.state.routes)} routes")
    return app
