import logging
from typing import Optional

import openai
from pydantic import AnyUrl, TypeAdapter, ValidationError

from app.config import Config
from app.exceptions import (
    AuthenticationError,
    InvalidFormatError,
    MissingInputError,
    NotFoundError,
    UpstreamError,
)
from app.schemas.summarize import ContentSummary, LegitimacyVerdict, SummarizeResponse
from app.services.content_client import ContentClient, ContentServiceError
from app.services.llm_client import LLMClient
from app.transformations.moderation import (
    MODERATION_SYSTEM_MESSAGE,
    MODERATION_TEMPERATURE,
    build_moderation_prompt,
    parse_moderation_reply,
)
from app.transformations.tags import (
    TAGS_SYSTEM_MESSAGE,
    TAGS_TEMPERATURE,
    build_tags_prompt,
    fallback_tags,
    normalize_tags,
)

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available"
GENERIC_FAILURE = "Failed to summarize the URL"

_absolute_url = TypeAdapter(AnyUrl)


def validate_url(url: Optional[str]) -> str:
    """
    Checks that the url is present and is a syntactically valid absolute URL.
    Any scheme is accepted; whether the page can be fetched is left to the
    content service.

    :param url: The url received from the caller.
    :return: The url, unchanged.
    :raises MissingInputError: if the url is missing or empty.
    :raises InvalidFormatError: if the url can not be parsed.
    """
    if not url:
        raise MissingInputError("URL is required")
    try:
        _absolute_url.validate_python(url)
    except ValidationError:
        raise InvalidFormatError("Invalid URL format")
    return url


class UrlSummarizer:
    """
    Runs the verdict pipeline for a single URL: fetch a summary of the page from
    the content service, ask the language model whether the content is
    legitimate, ask it for topical keywords and combine both answers.

    The three collaborator calls are made one after another. Only failures of
    the content retrieval and a rejected language model credential during the
    legitimacy check abort the request; the legitimacy check and the keyword
    extraction otherwise degrade to local fallbacks.
    """

    def __init__(self, config: Config, content_client: ContentClient, llm_client: LLMClient):
        self.config = config
        self.content_client = content_client
        self.llm_client = llm_client

    @classmethod
    def from_config(cls, config: Config) -> "UrlSummarizer":
        """
        Creates a summarizer with collaborator clients built from the configuration.

        :raises ConfigurationError: if any credential is missing.
        """
        config.check_credentials()
        content_client = ContentClient(
            api_key=config.EXA_API_KEY,
            base_url=config.EXA_BASE_URL,
            timeout=config.REQUEST_TIMEOUT,
        )
        llm_client = LLMClient(
            api_key=config.GROQ_API_KEY,
            base_url=config.GROQ_BASE_URL,
            model=config.GROQ_MODEL,
            timeout=config.REQUEST_TIMEOUT,
        )
        return cls(config, content_client, llm_client)

    async def summarize(self, url: Optional[str]) -> SummarizeResponse:
        """
        Produces the verdict for a URL.

        :param url: The url received from the caller.
        :return: The verdict with the optional keyword list.
        :rtype: SummarizeResponse
        :raises VerdictError: a subclass describing why no verdict could be produced.
        """
        url = validate_url(url)
        content = await self.fetch_summary(url)
        verdict = await self.judge_legitimacy(content)
        tags = await self.extract_tags(content)

        logger.info("Verdict for %s: pass=%s, reason=%s", url, verdict.is_legit, verdict.reason)
        return SummarizeResponse(passed=verdict.is_legit, meta_tags=tags or None)

    async def fetch_summary(self, url: str) -> ContentSummary:
        try:
            results = await self.content_client.get_contents(url, summary=True)
        except ContentServiceError as e:
            logger.error("Content service error for %s: %s", url, e.message)
            if e.is_authentication_error:
                raise AuthenticationError("Exa", "EXA_API_KEY") from e
            raise UpstreamError(e.message or GENERIC_FAILURE) from e
        except Exception as e:
            logger.exception("Unexpected error while fetching contents of %s", url)
            raise UpstreamError(str(e) or GENERIC_FAILURE) from e

        if not results:
            raise NotFoundError("No content found for the provided URL")

        result = results[0]
        return ContentSummary(title=result.title, summary_text=result.summary or NO_SUMMARY)

    async def judge_legitimacy(self, content: ContentSummary) -> LegitimacyVerdict:
        """
        Asks the language model whether the content is legitimate.

        A failed call counts as not legitimate, except a rejected credential which
        aborts the request.

        :raises AuthenticationError: if the language model rejects the credential.
        """
        try:
            reply = await self.llm_client.complete(
                MODERATION_SYSTEM_MESSAGE,
                build_moderation_prompt(content.title, content.summary_text),
                temperature=MODERATION_TEMPERATURE,
                json_response=True,
            )
        except openai.AuthenticationError as e:
            logger.error("Language model rejected the credential: %s", e)
            raise AuthenticationError("Groq", "GROQ_API_KEY") from e
        except Exception as e:
            logger.error("Error checking legitimacy: %s", e)
            return LegitimacyVerdict(
                is_legit=False,
                reason=f"Failed to verify legitimacy: {str(e) or 'Unknown error'}",
            )
        return parse_moderation_reply(reply)

    async def extract_tags(self, content: ContentSummary) -> str:
        """Returns the keyword string, computed locally if the language model call fails."""
        try:
            reply = await self.llm_client.complete(
                TAGS_SYSTEM_MESSAGE,
                build_tags_prompt(content.title, content.summary_text),
                temperature=TAGS_TEMPERATURE,
            )
        except Exception as e:
            logger.warning("Error generating meta tags, using local keywords: %s", e)
            return fallback_tags(content.title, content.summary_text)
        if not reply:
            return ""
        return normalize_tags(reply)

    async def aclose(self) -> None:
        await self.content_client.aclose()
        await self.llm_client.aclose()
