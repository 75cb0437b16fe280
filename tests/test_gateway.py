"""Tests for the AI gateway: request shaping and reply parsing."""

import pytest

from ihangire.errors import GatewayFailure, InvalidInput
from ihangire.models import BusinessIdea, ChatMessage, GroundingSource, Sender
from ihangire.services.gateway import PARSE_ERROR_COST, is_parse_error, parse_ideas

IDEAS_JSON = """[
  {"name": "Moto Wash", "concept": "Mobile moto-taxi cleaning.", "startupCost": "Low"},
  {"name": "Code Club", "concept": "After-school coding.", "startupCost": "Medium"}
]"""


class TestDiscoverIdeas:
    def test_parses_ideas_and_sources(self, gateway, llm):
        source = GroundingSource(uri="https://maps.example/1", title="Kimironko Market")
        llm.search_reply = (IDEAS_JSON, [source])

        result = gateway.discover_ideas("Kimironko, Kigali")

        assert [i.name for i in result.ideas] == ["Moto Wash", "Code Club"]
        assert result.ideas[1].startup_cost == "Medium"
        assert result.sources == [source]
        prompt = llm.calls[0][1][0]["content"]
        assert '"Kimironko, Kigali"' in prompt

    def test_strips_code_fences(self, gateway, llm):
        llm.search_reply = ("```json\n" + IDEAS_JSON + "\n```", [])
        assert len(gateway.discover_ideas("Kigali").ideas) == 2

    def test_unparseable_reply_becomes_single_error_idea(self, gateway, llm):
        llm.search_reply = ("Sorry, I can't help", [])

        result = gateway.discover_ideas("Kigali")

        assert len(result.ideas) == 1
        idea = result.ideas[0]
        assert idea.startup_cost == PARSE_ERROR_COST
        assert "Sorry, I can't help" in idea.concept
        assert is_parse_error(idea)
        assert result.sources == []

    def test_sources_pass_through_on_parse_failure(self, gateway, llm):
        source = GroundingSource(uri="https://x", title="x")
        llm.search_reply = ("not json", [source])
        assert gateway.discover_ideas("Kigali").sources == [source]

    def test_transport_error_raises_gateway_failure(self, gateway, llm):
        llm.search_reply = ConnectionError("boom")
        with pytest.raises(GatewayFailure):
            gateway.discover_ideas("Kigali")

    def test_blank_location_is_rejected_before_calling(self, gateway, llm):
        with pytest.raises(InvalidInput):
            gateway.discover_ideas("   ")
        assert llm.calls == []


@pytest.mark.parametrize(
    "text",
    ['{"name": "solo"}', '["a", "b"]', "[1, 2]", ""],
)
def test_parse_ideas_non_array_of_objects_falls_back(text):
    ideas = parse_ideas(text)
    assert len(ideas) == 1 and is_parse_error(ideas[0])


def test_parse_ideas_fills_missing_keys():
    assert parse_ideas('[{"name": "Only name"}]') == [
        BusinessIdea(name="Only name", concept="", startup_cost="")
    ]


def test_analyze_idea_uses_analysis_model(gateway, llm):
    llm.replies = ["## SWOT Analysis\n* Strength"]
    idea = BusinessIdea("Moto Wash", "Mobile cleaning.", "Low")

    text = gateway.analyze_idea(idea)

    assert text.startswith("## SWOT")
    _, messages, settings = llm.calls[0]
    assert settings.model == gateway.analysis_model
    assert "Moto Wash" in messages[0]["content"]


def test_analyze_idea_failure(gateway, llm):
    llm.replies = [TimeoutError("slow")]
    with pytest.raises(GatewayFailure):
        gateway.analyze_idea(BusinessIdea("a", "b", "Low"))


def test_generate_names_returns_list_as_is(gateway, llm):
    llm.replies = ['```json\n["Kigali Threads", "Kigali Threads", "Green Loom"]\n```']
    assert gateway.generate_names("eco fashion") == [
        "Kigali Threads",
        "Kigali Threads",
        "Green Loom",
    ]


def test_generate_names_unparseable_is_gateway_failure(gateway, llm):
    llm.replies = ["Here are some names: Kigali Threads"]
    with pytest.raises(GatewayFailure):
        gateway.generate_names("eco fashion")


class TestStreamChat:
    def test_fragments_arrive_in_order(self, gateway, llm):
        llm.fragments = ["Hel", "lo, ", "world!"]
        assert list(gateway.stream_chat("hi")) == ["Hel", "lo, ", "world!"]

    def test_session_keeps_context_between_turns(self, gateway, llm):
        session = gateway.start_chat([ChatMessage(Sender.BOT, "Hello!")])
        llm.fragments = ["First answer"]
        list(gateway.stream_chat("q1", session=session))
        llm.fragments = ["Second"]
        list(gateway.stream_chat("q2", session=session))

        sent = llm.calls[-1][1]
        assert sent == [
            {"role": "assistant", "content": "Hello!"},
            {"role": "user", "content": "q1"},
            {"role": "assistant", "content": "First answer"},
            {"role": "user", "content": "q2"},
        ]
        assert llm.calls[-1][3] == gateway.prompts.advisor_system()

    def test_failure_mid_stream_raises_gateway_failure(self, gateway, llm):
        llm.fragments = ["partial", RuntimeError("dropped")]
        received = []
        with pytest.raises(GatewayFailure):
            for fragment in gateway.stream_chat("hi"):
                received.append(fragment)
        assert received == ["partial"]

    def test_failed_turn_without_fragments_is_dropped_from_context(self, gateway, llm):
        session = gateway.start_chat()
        llm.fragments = [RuntimeError("down")]
        with pytest.raises(GatewayFailure):
            list(gateway.stream_chat("hi", session=session))
        assert session.turns == []


class TestGenerateImage:
    def test_bytes_become_data_url(self, gateway, llm):
        image = gateway.generate_image("coffee shop for gamers")
        assert image.mime_type == "image/png"
        assert image.data == b"\x89PNG"
        assert image.data_url.startswith("data:image/png;base64,")
        assert "coffee shop for gamers" in llm.calls[0][1]

    def test_url_payload(self, gateway, llm):
        llm.image_payload = {"kind": "url", "data": "https://img.example/logo.png"}
        assert gateway.generate_image("x").data_url == "https://img.example/logo.png"

    def test_empty_payload_is_failure(self, gateway, llm):
        llm.image_payload = {"kind": "none", "data": None}
        with pytest.raises(GatewayFailure):
            gateway.generate_image("x")

    def test_transport_error(self, gateway, llm):
        llm.image_payload = RuntimeError("500")
        with pytest.raises(GatewayFailure):
            gateway.generate_image("x")
