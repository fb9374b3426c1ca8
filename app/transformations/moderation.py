import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.schemas.moderation_output import ModerationOutput
from app.schemas.summarize import LegitimacyVerdict

logger = logging.getLogger(__name__)

# llm settings
MODERATION_TEMPERATURE = 0.3
LEGITIMATE_MARKERS = ("true", "legitimate", "safe")
NO_REASON = "No reason provided"

json_reply = TypeAdapter(Any)


MODERATION_SYSTEM_MESSAGE = (
    "You are a content moderation assistant. Analyze the provided website summary and "
    "determine if the website is legitimate and safe. A legitimate website should NOT "
    "contain pornographic content, illicit material, illegal activities, or harmful content. "
    "Respond with a JSON object containing \"isLegit\" (boolean) and \"reason\" "
    "(string explaining your decision)."
)


def build_moderation_prompt(title: Optional[str], summary: str) -> str:
    return (
        "Analyze the following website summary and determine if this website is legitimate "
        "(no pornographic, illicit, or harmful content):\n\n"
        f"Title: {title or 'N/A'}\n\n"
        f"Summary: {summary}\n\n"
        "Respond with ONLY a valid JSON object in this format: "
        "{\"isLegit\": true/false, \"reason\": \"your explanation here\"}"
    )


def judge_by_markers(raw_reply: str) -> bool:
    """
    Heuristic used when the model reply is not a JSON object: the content is
    considered legitimate if the reply mentions any of the legitimate markers.

    :param raw_reply: The unparsed model reply.
    :return: True if any marker occurs in the lowercased reply.
    """
    lowered = raw_reply.lower()
    return any(marker in lowered for marker in LEGITIMATE_MARKERS)


def parse_moderation_reply(raw_reply: Optional[str]) -> LegitimacyVerdict:
    """
    Converts the moderation model reply into a LegitimacyVerdict.

    The reply is parsed once as JSON. Only a literal boolean ``true`` under
    ``isLegit`` of a JSON object marks the content as legitimate; any other
    JSON value is not legitimate. When the reply is not JSON at all the marker
    heuristic is applied to the same raw text and the raw text becomes the
    reason. An empty reply yields a negative verdict with an empty reason.

    :param raw_reply: Message content returned by the chat completion, may be None.
    :return: The parsed verdict.
    :rtype: LegitimacyVerdict
    """
    if not raw_reply:
        return LegitimacyVerdict(is_legit=False, reason="")

    try:
        parsed = json_reply.validate_json(raw_reply)
    except ValidationError as parse_error:
        logger.warning("Moderation reply is not JSON, using marker heuristic: %s", parse_error)
        return LegitimacyVerdict(is_legit=judge_by_markers(raw_reply), reason=raw_reply)

    if not isinstance(parsed, dict):
        return LegitimacyVerdict(is_legit=False, reason=NO_REASON)

    output = ModerationOutput.model_validate(parsed)
    reason = str(output.reason) if output.reason else NO_REASON
    return LegitimacyVerdict(is_legit=output.is_legit is True, reason=reason)
