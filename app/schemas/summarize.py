from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


class SummarizeRequest(BaseModel):
    """
    Body of the summarize endpoint.

    The url is kept as a plain optional string so that a missing or malformed
    value is reported by the summarizer with its own error messages instead of
    a generic schema error.
    """
    url: Optional[str] = Field(default=None, description="Absolute URL of the page to check")


class SummarizeResponse(BaseModel):
    """
    Verdict returned for a single URL: whether the page passed the legitimacy
    check and, when available, a comma separated list of topical keywords.
    """
    model_config = ConfigDict(populate_by_name=True)

    passed: bool = Field(alias="pass", description="True when the content was judged legitimate")
    meta_tags: Optional[str] = Field(
        default=None,
        alias="metaTags",
        description="Comma separated keywords describing the page"
    )


class ContentResult(BaseModel):
    """One entry of the content service `results` list."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    summary: Optional[str] = None
    url: Optional[str] = None


class ContentsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[ContentResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def null_results_as_empty(cls, value):
        return [] if value is None else value


class ContentSummary(BaseModel):
    title: Optional[str] = Field(default=None, description="Title of the page, if the content service found one")
    summary_text: str = Field(description="Generated summary of the page")


class LegitimacyVerdict(BaseModel):
    is_legit: bool
    reason: str


class ErrorResponse(BaseModel):
    error: str = Field(description="Description of the problem")


class UsageBody(BaseModel):
    url: str


class Usage(BaseModel):
    method: str
    url: str
    body: UsageBody
    example: str


class MethodNotAllowedResponse(BaseModel):
    error: str
    message: str
    usage: Usage


def usage_payload() -> dict[str, Any]:
    """Body returned when the summarize endpoint is called with GET."""
    return MethodNotAllowedResponse(
        error="Method not allowed",
        message="This endpoint only accepts POST requests",
        usage=Usage(
            method="POST",
            url="/summarize",
            body=UsageBody(url="https://example.com"),
            example=(
                "curl -X POST http://localhost:8000/summarize "
                "-H \"Content-Type: application/json\" "
                "-d '{\"url\": \"https://example.com\"}'"
            ),
        ),
    ).model_dump()
