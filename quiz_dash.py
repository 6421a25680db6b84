import logging

import streamlit as st

from dashboard.controller import QuizController, View
from dashboard.settings import build_source
from dashboard.ui import render_home, render_quiz, render_results, render_sidebar

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')


# ==========================================
# ENVIRONMENT & STATE
# ==========================================

def initialize_session_state():
    """Initializes page config and session variables."""
    st.set_page_config(page_title="Quiz Dash", page_icon="📚", layout="centered")

    if 'controller' not in st.session_state:
        st.session_state.controller = None
    if 'settings' not in st.session_state:
        st.session_state.settings = None
    if 'reload_requested' not in st.session_state:
        st.session_state.reload_requested = False


def get_controller(settings):
    """Returns the session's controller, rebuilding it when the settings change."""
    if st.session_state.controller is None or st.session_state.settings != settings:
        try:
            source = build_source(settings)
        except ValueError as e:
            st.warning(str(e))
            return None
        controller = QuizController(source, questions_per_quiz=settings.questions_per_quiz)
        with st.spinner("Loading categories..."):
            controller.load_categories()
        st.session_state.controller = controller
        st.session_state.settings = settings
    return st.session_state.controller


# ==========================================
# MAIN LOOP
# ==========================================

def run_app():
    initialize_session_state()

    settings = render_sidebar()
    if st.session_state.reload_requested:
        st.session_state.reload_requested = False
        # Reloading starts over with a fresh data source, but never mid-quiz
        current = st.session_state.controller
        if current is None or current.view == View.HOME:
            st.session_state.controller = None

    controller = get_controller(settings)
    if controller is None:
        return

    if controller.view == View.QUIZ and controller.session is not None:
        render_quiz(controller)
    elif controller.view == View.RESULTS and controller.result is not None:
        render_results(controller)
    else:
        render_home(controller)


if __name__ == "__main__":
    run_app()
