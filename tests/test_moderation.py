import json
import pytest

import app.transformations.moderation as moderation
from app.transformations.moderation import build_moderation_prompt, json_reply, parse_moderation_reply


def test_parse_moderation_reply_json():
    verdict = parse_moderation_reply(json.dumps({"isLegit": True, "reason": "no harmful content"}))
    assert verdict.is_legit is True
    assert verdict.reason == "no harmful content"

    verdict = parse_moderation_reply(json.dumps({"isLegit": False, "reason": "illegal gambling"}))
    assert verdict.is_legit is False
    assert verdict.reason == "illegal gambling"

    verdict = parse_moderation_reply(json.dumps({"isLegit": True}))
    assert verdict.is_legit is True
    assert verdict.reason == "No reason provided"


@pytest.mark.parametrize("is_legit", ["true", 1, "yes", None])
def test_parse_moderation_reply_requires_literal_true(is_legit):
    verdict = parse_moderation_reply(json.dumps({"isLegit": is_legit, "reason": "unsure"}))
    assert verdict.is_legit is False


@pytest.mark.parametrize(
    "raw_reply, is_legit",
    [
        ("This website is legitimate.", True),
        ("Verdict: TRUE", True),
        ("The content appears safe for all audiences", True),
        ("This website hosts pirated material.", False),
        ("{not valid json", False),
    ]
)
def test_parse_moderation_reply_heuristic(raw_reply, is_legit):
    verdict = parse_moderation_reply(raw_reply)
    assert verdict.is_legit is is_legit
    assert verdict.reason == raw_reply


@pytest.mark.parametrize("raw_reply", [None, ""])
def test_parse_moderation_reply_empty(raw_reply):
    verdict = parse_moderation_reply(raw_reply)
    assert verdict.is_legit is False
    assert verdict.reason == ""


@pytest.mark.parametrize("raw_reply", ["true", "[true]", '"safe"', "1", "null"])
def test_parse_moderation_reply_json_not_object(raw_reply):
    # valid JSON which is not an object never counts as legitimate
    verdict = parse_moderation_reply(raw_reply)
    assert verdict.is_legit is False
    assert verdict.reason == "No reason provided"


def test_parse_moderation_reply_parses_once(monkeypatch):
    parsed_replies = []

    class CountingAdapter:
        def validate_json(self, raw):
            parsed_replies.append(raw)
            return json_reply.validate_json(raw)

    monkeypatch.setattr(moderation, "json_reply", CountingAdapter())

    verdict = parse_moderation_reply("I think it is safe")
    assert verdict.is_legit is True
    assert parsed_replies == ["I think it is safe"]

    parsed_replies.clear()
    verdict = parse_moderation_reply('{"isLegit": true, "reason": "fine"}')
    assert verdict.is_legit is True
    assert parsed_replies == ['{"isLegit": true, "reason": "fine"}']


def test_build_moderation_prompt():
    prompt = build_moderation_prompt("Example", "A benign test page.")
    assert "Title: Example" in prompt
    assert "Summary: A benign test page." in prompt
    assert '"isLegit"' in prompt
