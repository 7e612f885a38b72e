import streamlit as st

from dashboard.constants import BOOK_STATUS_FINISHED, BOOK_STATUSES
from dashboard.state import session_slices
from dashboard.state.books import BookShelf
from dashboard.tabs.common import require_user, section_title


def _get_shelf(ctx, user_id):
    shelf = session_slices.get_or_create("books", user_id, lambda: BookShelf(ctx.store, user_id))
    if not session_slices.get_value("books", f"{user_id}.loaded"):
        shelf.fetch()
        session_slices.set_value("books", f"{user_id}.loaded", True)
    return shelf


def _on_status_change(shelf, book_id, widget_key):
    if not shelf.update_status(book_id, st.session_state[widget_key]):
        st.toast("Could not update status. Reloaded your library.")


def _on_lesson_commit(shelf, book_id, widget_key):
    lesson = st.session_state.get(widget_key, "")
    shelf.update_lesson(book_id, lesson)
    shelf.save_lesson(book_id, lesson)


def render_books_tab(ctx):
    section_title("READING LOG")
    user_id = require_user(ctx)
    if not user_id:
        return
    shelf = _get_shelf(ctx, user_id)
    st.markdown(
        f"<div class='small-label'>{shelf.finished_count} / {len(shelf.books)} finished</div>",
        unsafe_allow_html=True,
    )

    with st.form(key="books.add_form", clear_on_submit=True):
        add_cols = st.columns([3, 2, 1])
        with add_cols[0]:
            st.text_input("Book title", key="books.new_title", placeholder="Book Title", label_visibility="collapsed")
        with add_cols[1]:
            st.text_input("Author", key="books.new_author", placeholder="Author", label_visibility="collapsed")
        with add_cols[2]:
            submit_add = st.form_submit_button("ADD", use_container_width=True)
    if submit_add:
        if shelf.add(st.session_state.get("books.new_title", ""), st.session_state.get("books.new_author", "")) is None:
            st.warning("Book not added. A title is required.")

    for book in shelf.books:
        book_id = book["id"]
        with st.container(border=True):
            row_cols = st.columns([5, 2, 0.6])
            with row_cols[0]:
                st.markdown(f"**{book.get('title', '')}**")
                if book.get("author"):
                    st.caption(book["author"])
            with row_cols[1]:
                status_key = f"books.status.{book_id}"
                st.session_state[status_key] = book.get("status") or BOOK_STATUSES[0]
                st.selectbox(
                    "Status",
                    BOOK_STATUSES,
                    key=status_key,
                    label_visibility="collapsed",
                    on_change=_on_status_change,
                    args=(shelf, book_id, status_key),
                )
            with row_cols[2]:
                confirm_key = f"books.confirm_delete.{book_id}"
                if st.session_state.get(confirm_key):
                    if st.button("✔", key=f"books.delete_yes.{book_id}", help="Remove this book from your library?"):
                        shelf.delete(book_id)
                        st.session_state[confirm_key] = False
                        st.rerun()
                elif st.button("✕", key=f"books.delete.{book_id}", type="tertiary"):
                    st.session_state[confirm_key] = True
                    st.rerun()
            if book.get("status") == BOOK_STATUS_FINISHED:
                lesson_key = f"books.lesson.{book_id}"
                st.session_state[lesson_key] = book.get("lesson") or ""
                st.text_area(
                    "Key lesson",
                    key=lesson_key,
                    placeholder="What was the key lesson?",
                    on_change=_on_lesson_commit,
                    args=(shelf, book_id, lesson_key),
                )
