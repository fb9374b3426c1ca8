import httpx
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi_mcp import FastApiMCP
from typing import Optional

from app.api.summarize import UrlSummarizer
from app.config import Config, config as env_config
from app.exceptions import ConfigurationError, VerdictError
from app.routers.summarize import summarize_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def verdict_error_handler(request: Request, exc: VerdictError) -> JSONResponse:
    return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(
        content={"error": "Invalid request body"},
        status_code=status.HTTP_400_BAD_REQUEST
    )


# Initialize FastAPI-MCP
included_operations = [
    "summarize_url",
]


def init_mcp(serv: FastAPI, timeout: float) -> FastApiMCP:
    """
    Exposes the summarize operation as an MCP tool mounted on the application.

    Tool calls are forwarded to the application itself through an ASGI transport,
    so no network round trip is involved.

    :param serv: The FastAPI application, with its routes already included.
    :param timeout: Timeout for one tool call, in seconds.
    :return: The mounted MCP server.
    """
    serv.state.mcp_client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=serv),
        base_url="http://apiserver",
        timeout=timeout,
    )
    mcp_serv = FastApiMCP(
        serv,
        http_client=serv.state.mcp_client,
        name="API for checking whether a website is legitimate",
        description="""
            MCP server for checking whether the content behind a URL is legitimate
            (no pornographic, illicit or harmful content) and for describing it with keywords.
            Exposes the following tools:
            - summarize_url
        """,
        include_operations=included_operations,
        describe_full_response_schema=True,
        describe_all_responses=True,
    )
    mcp_serv.mount_http()
    return mcp_serv


def init_app(
    config: Optional[Config] = None,
    summarizer: Optional[UrlSummarizer] = None,
    mount_mcp: bool = True,
):
    """
    Creates the FastAPI application.

    Credentials are checked once here. If one is missing the application still
    starts, but every summarize request answers with the configuration error.

    :param config: Configuration to use, read from the environment when omitted.
    :param summarizer: A ready summarizer, built from the configuration when omitted.
    :param mount_mcp: Whether to expose the summarize operation as an MCP tool at ``/mcp``.
    :return: The FastAPI application.
    """
    if config is None:
        config = env_config
    configure_logging(config.LOG_LEVEL)

    config_error = None
    if summarizer is None:
        try:
            summarizer = UrlSummarizer.from_config(config)
        except ConfigurationError as e:
            logger.error("Summarizer is not available: %s", e.message)
            config_error = e

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if app.state.summarizer is not None:
            await app.state.summarizer.aclose()
        if app.state.mcp is not None:
            await app.state.mcp_client.aclose()

    serv = FastAPI(title="URL verdict server", lifespan=lifespan)
    serv.state.config = config
    serv.state.summarizer = summarizer
    serv.state.config_error = config_error
    serv.add_exception_handler(VerdictError, verdict_error_handler)
    serv.add_exception_handler(RequestValidationError, request_validation_error_handler)
    serv.include_router(summarize_router)

    serv.state.mcp = init_mcp(serv, config.REQUEST_TIMEOUT) if mount_mcp else None

    return serv


my_app = init_app()
mcp_serv = my_app.state.mcp


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(my_app, host="0.0.0.0", port=8000, timeout_keep_alive=60)
