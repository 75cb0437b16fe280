"""Tests for the ideas, naming, visual, history, analysis and auth controllers."""

from ihangire.controller_analysis import ANALYSIS_ERROR, AnalysisController
from ihangire.controller_auth import AuthController
from ihangire.controller_history import HistoryController, cost_color
from ihangire.controller_ideas import SEARCH_ERROR, IdeasController, coordinates_query
from ihangire.controller_naming import NAMING_ERROR, NamingController
from ihangire.controller_visual import IMAGE_ERROR, VisualController
from ihangire.models import (
    AuthProvider,
    BlockKind,
    BusinessIdea,
    ChatMessage,
    SavedNameList,
    Sender,
    ViewStatus,
)

IDEAS_JSON = '[{"name": "Moto Wash", "concept": "Mobile cleaning.", "startupCost": "Low"}]'


class TestIdeasController:
    def test_search_success(self, gateway, history, user, llm):
        llm.search_reply = (IDEAS_JSON, [])
        ideas = IdeasController(gateway, history, user)

        assert ideas.search("Kigali") is True
        assert ideas.state.status == ViewStatus.SUCCESS
        assert ideas.ideas[0].name == "Moto Wash"

    def test_search_failure_sets_error_and_clears_results(self, gateway, history, user, llm):
        ideas = IdeasController(gateway, history, user)
        llm.search_reply = (IDEAS_JSON, [])
        ideas.search("Kigali")

        llm.search_reply = ConnectionError("down")
        assert ideas.search("Kigali") is False
        assert ideas.state.status == ViewStatus.ERROR
        assert ideas.state.error == SEARCH_ERROR
        assert ideas.ideas == []

    def test_blank_search_stays_idle(self, gateway, history, user, llm):
        ideas = IdeasController(gateway, history, user)
        assert ideas.search("  ") is False
        assert ideas.state.status == ViewStatus.IDLE

    def test_search_near_formats_coordinates(self, gateway, history, user, llm):
        ideas = IdeasController(gateway, history, user)
        ideas.search_near(-1.9441, 30.0619)
        prompt = llm.calls[0][1][0]["content"]
        assert coordinates_query(-1.9441, 30.0619) in prompt

    def test_save_only_once(self, gateway, history, user, llm):
        llm.search_reply = (IDEAS_JSON, [])
        ideas = IdeasController(gateway, history, user)
        ideas.search("Kigali")
        idea = ideas.ideas[0]

        assert ideas.can_save(idea)
        assert ideas.save(idea) is True
        assert ideas.is_saved(idea)
        assert not ideas.can_save(idea)
        assert ideas.save(idea) is False
        assert len(history.get_history(user.email).saved_ideas) == 1

    def test_parse_error_idea_cannot_be_saved(self, gateway, history, user, llm):
        llm.search_reply = ("no json here", [])
        ideas = IdeasController(gateway, history, user)
        ideas.search("Kigali")
        assert ideas.save(ideas.ideas[0]) is False
        assert history.get_history(user.email).saved_ideas == []


class TestAnalysisController:
    def test_open_renders_blocks(self, gateway, llm):
        llm.replies = ["## SWOT\n\n**Strengths**\n* Cheap\nPlain text"]
        analysis = AnalysisController(gateway)

        analysis.open(BusinessIdea("a", "b", "Low"))

        assert analysis.is_open
        assert [b.kind for b in analysis.blocks] == [
            BlockKind.HEADING_2,
            BlockKind.BOLD,
            BlockKind.BULLET,
            BlockKind.PARAGRAPH,
        ]

    def test_open_failure_then_close(self, gateway, llm):
        llm.replies = [RuntimeError("x")]
        analysis = AnalysisController(gateway)
        assert analysis.open(BusinessIdea("a", "b", "Low")) is None
        assert analysis.state.error == ANALYSIS_ERROR

        analysis.close()
        assert not analysis.is_open
        assert analysis.state.status == ViewStatus.IDLE


class TestNamingController:
    def test_generate_and_save(self, gateway, history, user, llm):
        llm.replies = ['["Green Loom", "EcoWear"]']
        naming = NamingController(gateway, history, user)

        assert naming.generate("eco fashion") is True
        assert naming.names == ["Green Loom", "EcoWear"]
        assert not naming.is_list_saved

        assert naming.save_list() is True
        assert naming.is_list_saved
        assert naming.save_list() is False

    def test_existing_concept_reports_already_saved(self, gateway, history, user, llm):
        history.save_name_list(SavedNameList("eco fashion", ["Old"]), user.email)
        llm.replies = ['["New"]']
        naming = NamingController(gateway, history, user)
        naming.generate("eco fashion")

        assert naming.is_list_saved
        assert naming.save_list() is False
        assert history.get_history(user.email).saved_name_lists[0].names == ["Old"]

    def test_new_generation_resets_saved_flag(self, gateway, history, user, llm):
        llm.replies = ['["A"]', '["B"]']
        naming = NamingController(gateway, history, user)
        naming.generate("first")
        naming.save_list()
        naming.generate("second")
        assert not naming.is_list_saved

    def test_failure(self, gateway, history, user, llm):
        llm.replies = [ConnectionError("x")]
        naming = NamingController(gateway, history, user)
        assert naming.generate("eco") is False
        assert naming.state.error == NAMING_ERROR
        assert naming.save_list() is False


class TestVisualController:
    def test_generate(self, gateway):
        visual = VisualController(gateway)
        image = visual.generate("gamer cafe")
        assert image is not None and image.data
        assert visual.state.status == ViewStatus.SUCCESS

    def test_failure(self, gateway, llm):
        llm.image_payload = RuntimeError("x")
        visual = VisualController(gateway)
        assert visual.generate("gamer cafe") is None
        assert visual.state.error == IMAGE_ERROR


class TestHistoryController:
    def test_empty(self, gateway, history, user):
        assert not HistoryController(gateway, history, user).has_history

    def test_greeting_only_chat_is_not_history(self, gateway, history, user):
        history.save_chat_history([ChatMessage(Sender.BOT, "hi")], user.email)
        past = HistoryController(gateway, history, user)
        assert not past.has_chat
        assert not past.has_history

    def test_refresh_picks_up_new_saves(self, gateway, history, user):
        past = HistoryController(gateway, history, user)
        history.save_idea(BusinessIdea("a", "b", "High"), user.email)
        past.refresh()
        assert past.has_history
        assert past.history.saved_ideas[0].name == "a"


def test_cost_colors():
    assert cost_color("Low") == "green"
    assert cost_color("High") == "red"
    assert cost_color("N/A") == "gray"


class TestAuthController:
    def test_login_error_message(self, auth):
        ctrl = AuthController(auth)
        assert ctrl.submit("nobody@x.com", "pw") is None
        assert ctrl.error == "No account found with this email."

    def test_toggle_to_sign_up_clears_error(self, auth):
        ctrl = AuthController(auth)
        ctrl.submit("nobody@x.com", "pw")
        ctrl.toggle_mode()
        assert not ctrl.is_login
        assert ctrl.error is None
        assert ctrl.submit("new@x.com", "pw").email == "new@x.com"

    def test_social(self, auth):
        assert AuthController(auth).social(AuthProvider.GITHUB).email == "user@github.com"
