"""
UI layer
Purpose: Streamlit-only glue. Renders the auth screen and the feature tabs,
collects user inputs, and delegates all work to the controllers. Keeps UI
concerns (layout/state widgets) separate from business logic so logic can be
unit tested without Streamlit.
"""

from pathlib import Path
from typing import Optional

import streamlit as st

from ihangire.config import load_settings
from ihangire.controller_analysis import AnalysisController
from ihangire.controller_auth import AuthController
from ihangire.controller_chat import ChatController
from ihangire.controller_history import HistoryController, cost_color
from ihangire.controller_ideas import IdeasController
from ihangire.controller_naming import NamingController
from ihangire.controller_visual import VisualController
from ihangire.models import (
    AuthProvider,
    BlockKind,
    BusinessIdea,
    Sender,
    User,
    ViewStatus,
)
from ihangire.persistence.history_store import HistoryStore
from ihangire.persistence.local_storage import InMemoryStorage, JsonFileStorage
from ihangire.services.auth import AuthService
from ihangire.services.gateway import AIGateway, is_parse_error
from ihangire.services.llm_openai import OpenAILLMClient
from ihangire.utils.logging import get_logger

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Ihangire Youth",
    page_icon="💡",
    layout="centered",
    initial_sidebar_state="expanded",
)

settings = load_settings()
logger = get_logger("ihangire.app")


@st.cache_resource
def get_storage(path: str, quota_bytes: int) -> JsonFileStorage:
    """One shared storage handle per data file (users and history)."""
    return JsonFileStorage(Path(path), quota_bytes=quota_bytes)


storage = get_storage(str(settings.storage_path), settings.storage_quota_bytes)
history_store = HistoryStore(storage)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
# The sign-in record belongs to this browser session only.
st_session.setdefault("session_storage", InMemoryStorage())
auth_service = AuthService(storage, session_storage=st_session.session_storage)
st_session.setdefault("auth_controller", AuthController(auth_service))
st_session.setdefault("user", auth_service.current_user())
st_session.setdefault("gateway", None)
st_session.setdefault("gateway_key", None)
st_session.setdefault("controllers", {})


# ---------------------------
# Helpers
# ---------------------------
def get_user() -> Optional[User]:
    return st_session.get("user")


def sign_in(user: User) -> None:
    st_session.user = user
    st_session.controllers = {}
    logger.info("Signed in as %s", user.email)
    st.rerun()


def sign_out() -> None:
    auth_service.logout()
    st_session.user = None
    st_session.controllers = {}
    st_session.auth_controller = AuthController(auth_service)
    st.rerun()


def get_controllers(gateway: AIGateway, user: User) -> dict:
    """Build the per-user controllers once; the User is passed in explicitly."""
    if not st_session.controllers:
        st_session.controllers = {
            "ideas": IdeasController(gateway, history_store, user),
            "chat": ChatController(gateway, history_store, user),
            "naming": NamingController(gateway, history_store, user),
            "visual": VisualController(gateway),
            "history": HistoryController(gateway, history_store, user),
        }
    return st_session.controllers


def render_analysis(analysis: AnalysisController, key: str) -> None:
    """Deep-dive panel; only the supported block markers are styled."""
    if not analysis.is_open:
        return
    with st.container(border=True):
        st.markdown(f"#### Analysis: {analysis.idea.name}")
        if analysis.state.error:
            st.error(analysis.state.error)
        for block in analysis.blocks:
            if block.kind == BlockKind.HEADING_2:
                st.markdown(f"## {block.text}")
            elif block.kind == BlockKind.HEADING_3:
                st.markdown(f"### {block.text}")
            elif block.kind == BlockKind.BOLD:
                st.markdown(f"**{block.text}**")
            elif block.kind == BlockKind.BULLET:
                st.markdown(f"- {block.text}")
            else:
                st.markdown(block.text)
        if st.button("Close", key=f"close_analysis_{key}"):
            analysis.close()
            st.rerun()


def open_analysis(analysis: AnalysisController, idea: BusinessIdea) -> None:
    with st.spinner("Analyzing this idea…"):
        analysis.open(idea)


def render_idea_card(idea: BusinessIdea, ctrl: IdeasController, key: str) -> None:
    with st.container(border=True):
        st.markdown(f"**{idea.name}**")
        st.write(idea.concept)
        st.markdown(f":{cost_color(idea.startup_cost)}[{idea.startup_cost} Start-up]")
        if is_parse_error(idea):
            return
        c1, c2 = st.columns(2)
        with c1:
            if st.button("Analyze Deeper", key=f"analyze_{key}"):
                open_analysis(ctrl.analysis, idea)
        with c2:
            saved = ctrl.is_saved(idea)
            if st.button(
                "Saved ✓" if saved else "Save Idea",
                key=f"save_{key}",
                disabled=saved,
            ):
                if ctrl.save(idea):
                    st.toast("Idea saved to your history.", icon="✅")
                st.rerun()


# ---------------------------
# AUTH SCREEN
# ---------------------------
def render_auth() -> None:
    ctrl: AuthController = st_session.auth_controller
    st.title("💡 Ihangire Youth")
    st.caption("Welcome back!" if ctrl.is_login else "Create your account")

    with st.form(f"auth_form_{'login' if ctrl.is_login else 'signup'}"):
        email = st.text_input("Email", key="auth_email")
        password = st.text_input("Password", type="password", key="auth_password")
        submitted = st.form_submit_button(
            "Log In" if ctrl.is_login else "Sign Up", type="primary"
        )
    if submitted:
        user = ctrl.submit(email, password)
        if user:
            sign_in(user)
    if ctrl.error:
        st.error(ctrl.error)

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Continue with Google", key="login_google"):
            user = ctrl.social(AuthProvider.GOOGLE)
            if user:
                sign_in(user)
    with c2:
        if st.button("Continue with GitHub", key="login_github"):
            user = ctrl.social(AuthProvider.GITHUB)
            if user:
                sign_in(user)

    toggle_label = (
        "Don't have an account? Sign up"
        if ctrl.is_login
        else "Already have an account? Log in"
    )
    if st.button(toggle_label, type="tertiary", key="auth_toggle"):
        ctrl.toggle_mode()
        st.rerun()


user = get_user()
if user is None:
    render_auth()
    st.stop()

# ---------------------------
# SIDEBAR: account & API key
# ---------------------------
with st.sidebar:
    st.markdown("# Ihangire Youth")
    st.caption(f"Signed in as **{user.email}**")
    if st.button("Log out"):
        sign_out()
    st.divider()

    st.markdown("## OpenAI API Key Required")
    user_api_key = st.text_input(
        "Enter your API key",
        value=settings.openai_api_key or "",
        type="password",
        help="We do not store your key. It stays in your session only.",
        key="api_key",
    )
    if not user_api_key:
        st.warning("Please enter your API key in the sidebar to continue.")
        st.stop()
    if st_session.gateway is None or st_session.gateway_key != user_api_key:
        st_session.gateway = None
        st_session.gateway_key = None
        try:
            llm = OpenAILLMClient(api_key=user_api_key)
            llm.client.models.list()
        except Exception as e:
            logger.warning("OpenAI key rejected: %s", e)
            st.error(f"OpenAI client init failed: {e}")
            st.stop()
        st_session.gateway = AIGateway.from_settings(llm, settings)
        st_session.gateway_key = user_api_key
        st_session.controllers = {}

controllers = get_controllers(st_session.gateway, user)

# ---------------------------
# MAIN: tabs
# ---------------------------
(
    ideas_tab,
    chat_tab,
    names_tab,
    visual_tab,
    history_tab,
) = st.tabs(["Ideas", "Advisor", "Names", "Visualize", "History"])

with ideas_tab:
    ideas: IdeasController = controllers["ideas"]
    st.subheader("Discover business ideas")
    st.caption("Tell us where you are, and AI will suggest ideas that fit the area.")
    with st.form("ideas_form"):
        location = st.text_input(
            "Location", placeholder="e.g., 'Kimironko, Kigali' or 'Downtown Nairobi'"
        )
        find = st.form_submit_button(
            "Find Ideas", type="primary", disabled=ideas.state.is_loading
        )
    if find:
        with st.spinner("Scanning the area for opportunities…"):
            ideas.search(location)

    if ideas.state.error:
        st.error(ideas.state.error)
    for i, idea in enumerate(ideas.ideas):
        render_idea_card(idea, ideas, key=f"idea_{i}")
    if ideas.sources:
        st.markdown("**Sources**")
        st.markdown("\n".join(f"- [{s.title}]({s.uri})" for s in ideas.sources))
    render_analysis(ideas.analysis, key="ideas")

with chat_tab:
    chat: ChatController = controllers["chat"]
    st.subheader("AI business advisor")

    transcript = st.container(height=500, border=True)
    with transcript:
        for msg in chat.messages:
            with st.chat_message("user" if msg.sender == Sender.USER else "assistant"):
                st.markdown(msg.text)

    prompt = None
    if chat.starters:
        cols = st.columns(2)
        for i, starter in enumerate(chat.starters):
            with cols[i % 2]:
                if st.button(starter, key=f"starter_{i}", disabled=chat.streaming):
                    prompt = starter

    typed = st.chat_input("Ask for business advice...", disabled=chat.streaming)
    prompt = prompt or typed
    if prompt and prompt.strip():
        with transcript:
            with st.chat_message("user"):
                st.markdown(prompt)
            with st.chat_message("assistant"):
                st.write_stream(chat.send(prompt))
        st.rerun()

with names_tab:
    naming: NamingController = controllers["naming"]
    st.subheader("Business name generator")
    st.caption(
        "Describe your business concept, and let AI brainstorm creative names for you."
    )
    with st.form("names_form"):
        concept = st.text_input(
            "Concept", placeholder="e.g., 'Eco-friendly fashion brand in Kigali'"
        )
        generate = st.form_submit_button(
            "Generate Names", type="primary", disabled=naming.state.is_loading
        )
    if generate:
        with st.spinner("Brainstorming names…"):
            naming.generate(concept)

    if naming.state.error:
        st.error(naming.state.error)
    elif naming.names:
        st.caption("Use the copy icon next to a name to copy it.")
        for name in naming.names:
            st.code(name, language=None)
        saved = naming.is_list_saved
        if st.button(
            "Saved to History" if saved else "Save Names",
            disabled=saved,
            key="save_names",
        ):
            if naming.save_list():
                st.toast("Names saved to your history.", icon="✅")
            st.rerun()
    elif naming.state.status == ViewStatus.IDLE:
        st.info("Your generated names will appear here.")

with visual_tab:
    visual: VisualController = controllers["visual"]
    st.subheader("Visualize your brand")
    st.caption("Enter a business concept to generate a unique logo idea with AI.")
    with st.form("visual_form"):
        logo_concept = st.text_input(
            "Concept", placeholder="e.g., 'A coffee shop for gamers'"
        )
        draw = st.form_submit_button(
            "Generate Logo", type="primary", disabled=visual.state.is_loading
        )
    if draw:
        with st.spinner("Sketching your logo…"):
            visual.generate(logo_concept)

    if visual.state.error:
        st.error(visual.state.error)
    elif visual.image is not None:
        img = visual.image
        st.image(img.data if img.data else img.url, width=400)
        if img.data:
            st.download_button(
                "Download logo",
                data=img.data,
                file_name="logo." + img.mime_type.split("/")[-1],
                mime=img.mime_type,
            )
    else:
        st.info("Your generated logo will appear here.")

with history_tab:
    past: HistoryController = controllers["history"]
    past.refresh()
    st.subheader("Your history")

    if not past.has_history:
        st.info("Nothing saved yet. Save ideas and names, or chat with the advisor.")

    if past.history.saved_ideas:
        st.markdown("### Saved ideas")
        for i, idea in enumerate(past.history.saved_ideas):
            with st.container(border=True):
                st.markdown(f"**{idea.name}**")
                st.write(idea.concept)
                st.markdown(
                    f":{cost_color(idea.startup_cost)}[{idea.startup_cost} Start-up]"
                )
                if st.button("Analyze Deeper", key=f"hist_analyze_{i}"):
                    open_analysis(past.analysis, idea)
        render_analysis(past.analysis, key="history")

    if past.history.saved_name_lists:
        st.markdown("### Saved names")
        for name_list in past.history.saved_name_lists:
            with st.expander(name_list.concept):
                st.markdown("\n".join(f"- {n}" for n in name_list.names))

    if past.has_chat:
        st.markdown("### Advisor chat")
        with st.container(height=400, border=True):
            for msg in past.history.chat_history:
                with st.chat_message(
                    "user" if msg.sender == Sender.USER else "assistant"
                ):
                    st.markdown(msg.text)

st.divider()
st.caption(
    "Privacy tip: this prototype stores accounts locally in plain text. "
    "Do not reuse a real password."
)
