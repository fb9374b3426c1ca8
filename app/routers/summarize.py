from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from typing import Annotated

from app.api.summarize import UrlSummarizer
from app.exceptions import ConfigurationError
from app.schemas.summarize import (
    ErrorResponse,
    MethodNotAllowedResponse,
    SummarizeRequest,
    SummarizeResponse,
    usage_payload,
)


summarize_router = APIRouter()


def get_summarizer(request: Request) -> UrlSummarizer:
    """
    Returns the summarizer created at startup.

    :raises ConfigurationError: if the application started without the required credentials.
    """
    summarizer = getattr(request.app.state, "summarizer", None)
    if summarizer is None:
        raise getattr(request.app.state, "config_error", None) or ConfigurationError(
            "Summarizer is not configured"
        )
    return summarizer


@summarize_router.post(
    "/summarize",
    status_code=status.HTTP_200_OK,
    response_model=SummarizeResponse,
    response_model_exclude_none=True,
    operation_id="summarize_url",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def summarize_url(
    summarizer: Annotated[UrlSummarizer, Depends(get_summarizer)],
    payload: SummarizeRequest,
):
    """
    Checks whether the page behind a URL is legitimate and describes it with keywords.

    The page summary is fetched from the content service, then the language
    model judges its legitimacy (no pornographic, illicit or otherwise harmful
    content) and proposes 5-10 keywords.

    :param summarizer: The summarizer created at startup (as a dependency).
    :param payload: Body containing the url to check.
    :return: A `SummarizeResponse` with the `pass` verdict and the optional
        comma separated `metaTags`.
    """
    return await summarizer.summarize(payload.url)


@summarize_router.get(
    "/summarize",
    status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
    response_model=MethodNotAllowedResponse,
    operation_id="summarize_usage",
)
async def summarize_usage():
    """Describes how the summarize endpoint has to be called."""
    return JSONResponse(
        content=usage_payload(),
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED
    )
