"""
UI
==

This module renders the three screens (category selection, quiz, results)
and the settings sidebar.
"""

import plotly.express as px
import streamlit as st

from analytics.metrics import PASS_THRESHOLD, details_frame, is_passed, percentage
from dashboard.controller import QuizController
from dashboard.settings import SOURCE_LOCAL, SOURCE_REMOTE, Settings, load_settings

SOURCE_LABELS = {SOURCE_REMOTE: "Quiz service", SOURCE_LOCAL: "Static data file"}


def show_alert(controller: QuizController):
    alert = controller.pop_alert()
    if alert:
        st.error(alert)


def render_sidebar() -> Settings:
    defaults = load_settings()
    with st.sidebar:
        st.title("📝 Quiz Dash")
        st.header("Settings")
        source = st.radio(
            "Data source",
            [SOURCE_REMOTE, SOURCE_LOCAL],
            index=0 if defaults.source == SOURCE_REMOTE else 1,
            format_func=SOURCE_LABELS.get,
        )
        backend_url = st.text_input("Backend URL", value=defaults.backend_url,
                                    disabled=source != SOURCE_REMOTE)
        data_file = st.text_input("Data file", value=defaults.data_file,
                                  disabled=source != SOURCE_LOCAL)

        st.divider()
        if st.button("🔄 Reload categories"):
            st.session_state.reload_requested = True

    return Settings(source=source, backend_url=backend_url.strip(), data_file=data_file.strip(),
                    questions_per_quiz=defaults.questions_per_quiz, timeout=defaults.timeout)


def render_home(controller: QuizController):
    st.title("📚 Programming Quiz Platform")
    st.caption("Test your knowledge across multiple programming languages and concepts")
    show_alert(controller)

    if controller.load_error:
        st.error(controller.load_error)
        return
    if not controller.categories:
        st.info("No categories available yet.")
        return

    columns = st.columns(3)
    for index, category in enumerate(controller.categories):
        with columns[index % 3].container(border=True):
            st.subheader(category.display_name)
            st.caption(f"{category.question_count} questions available")
            if st.button("Start ➜", key=f"category-{category.name}", use_container_width=True):
                with st.spinner("Loading quiz..."):
                    controller.start_quiz(category)
                st.rerun()


def render_question(controller: QuizController):
    session = controller.session
    question = session.current
    selected = session.answer_for(question)

    st.markdown(f"### {question.text}")
    for key, text in question.options():
        if st.button(f"**{key}.** {text}", key=f"question-{question.answer_id}-option-{key.lower()}",
                     type="primary" if selected == key else "secondary",
                     use_container_width=True):
            controller.select_answer(question.id, key)
            st.rerun()


def render_navigation(controller: QuizController):
    session = controller.session
    st.divider()
    prev_col, next_col = st.columns(2)

    with prev_col:
        if st.button("← Previous", disabled=session.is_first, use_container_width=True):
            controller.go_previous()
            st.rerun()

    with next_col:
        if session.is_last:
            if st.button("Submit Quiz 🏆", type="primary", disabled=not session.can_submit(),
                         use_container_width=True):
                with st.spinner("Submitting your answers..."):
                    controller.submit_quiz()
                st.rerun()
        elif st.button("Next →", type="primary", disabled=not session.can_advance(),
                       use_container_width=True):
            controller.go_next()
            st.rerun()


def render_quiz(controller: QuizController):
    session = controller.session
    title_col, exit_col = st.columns([4, 1])
    title_col.subheader(f"{controller.selected_category.display_name} Quiz")
    if exit_col.button("Exit Quiz"):
        controller.reset_quiz()
        st.rerun()

    st.progress(session.progress())
    st.caption(f"Question {session.index + 1} of {session.total}")
    show_alert(controller)

    render_question(controller)
    render_navigation(controller)


def render_score_chart(result):
    fig = px.pie(
        names=["Correct", "Incorrect"],
        values=[result.score, result.total - result.score],
        color=["Correct", "Incorrect"],
        color_discrete_map={"Correct": "#2ca02c", "Incorrect": "#d62728"},
        hole=0.6,
    )
    fig.update_layout(height=220, margin=dict(l=10, r=10, t=10, b=10), showlegend=False)
    st.plotly_chart(fig, width="stretch", key="score_chart")


def render_results(controller: QuizController):
    result = controller.result
    pct = percentage(result)
    passed = is_passed(result)

    st.title("🏆 Quiz Complete!")

    with st.container():
        c1, c2, c3 = st.columns(3)
        c1.metric("Score", f"{result.score} / {result.total}")
        c2.metric("Correct", f"{pct}%")
        c3.metric("Pass mark", f"{PASS_THRESHOLD}%")

    if passed:
        st.success("Excellent Work! 🎉")
    else:
        st.warning("Keep Learning! 📚")

    render_score_chart(result)

    st.divider()
    st.subheader("Detailed Results")
    for index, detail in enumerate(result.details):
        badge = "✓ Correct" if detail.is_correct else "✗ Incorrect"
        with st.expander(f"Q{index + 1} · {badge}", expanded=not detail.is_correct):
            st.markdown(f"**{detail.question_text}**")
            st.write(f"**Your Answer:** {detail.user_answer or 'Not answered'}")
            if not detail.is_correct:
                st.write(f"**Correct Answer:** {detail.correct_answer}")

    with st.expander("Summary table"):
        st.dataframe(details_frame(result), width="stretch")

    if st.button("↺ Take Another Quiz", type="primary"):
        controller.reset_quiz()
        st.rerun()
