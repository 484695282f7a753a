from __future__ import annotations

from streamlit.testing.v1 import AppTest


def _users_page_app():
    import streamlit as st

    from signup_ui.components.users import manage_users_ui

    class FakeClient:
        """Three pages of signups unfiltered, one page for any status filter."""

        def list_users(self, q=None, status=None, sort=None, page=None, page_size=None):
            st.session_state.setdefault("calls", []).append((status or "", page))
            pages = 1 if status else 3
            users = []
            if page <= pages:
                users = [{
                    "id": f"u{page}",
                    "username": f"user{page}",
                    "mobileNumber": "+15550100",
                    "email": None,
                    "status": status or "pending",
                }]
            return {
                "users": users,
                "total": pages,
                "page": page,
                "pageSize": page_size,
                "pages": pages,
                "counts": {"pending": 3, "approved": 0, "rejected": 1},
            }

        def update_user_status(self, user_id, status):
            st.session_state.setdefault("updates", []).append((user_id, status))
            return {"user": {"id": user_id, "status": status}}

    manage_users_ui(FakeClient())


def _run_users_page(**state) -> AppTest:
    at = AppTest.from_function(_users_page_app, default_timeout=10)
    for key, value in state.items():
        at.session_state[key] = value
    return at.run()


def test_changing_a_filter_returns_to_first_page():
    at = _run_users_page()
    at.button(key="users_next").click().run()
    at.button(key="users_next").click().run()
    assert at.session_state["users_page"] == 3

    at.selectbox(key="users_status").select("rejected").run()

    assert at.session_state["calls"][-1] == ("rejected", 1)
    assert "users_page" not in at.session_state
    assert not at.info
    assert not at.exception


def test_out_of_range_page_steps_back_to_last_page():
    at = _run_users_page(users_page=5)

    calls = at.session_state["calls"]
    assert calls[0] == ("", 5)
    assert calls[-1] == ("", 3)
    assert at.session_state["users_page"] == 3
    assert not at.info
    assert at.button(key="users_prev")


def test_status_change_message_survives_rerun():
    at = _run_users_page()
    at.button(key="status_approved_u1").click().run()

    assert at.session_state["updates"] == [("u1", "approved")]
    assert [s.value for s in at.success] == ["user1 is now approved"]
    assert "flash_message" not in at.session_state


def _blog_page_app():
    import streamlit as st

    from signup_ui.components.blog import blog_ui

    class FakeClient:
        def list_blog_tags(self):
            return {"items": [{"tag": "news", "count": 1}]}

        def list_blog(self, q=None, tag=None, sort=None, page=None, page_size=None):
            st.session_state.setdefault("calls", []).append((tag or "", page))
            pages = 1 if tag else 2
            items = []
            if page <= pages:
                items = [{"id": f"p{page}", "slug": f"post-{page}", "title": f"Post {page}", "excerpt": "", "tags": []}]
            return {"items": items, "total": pages, "page": page, "pageSize": page_size, "pages": pages}

    blog_ui(FakeClient())


def test_blog_tag_filter_returns_to_first_page():
    at = AppTest.from_function(_blog_page_app, default_timeout=10).run()
    at.button(key="blog_next").click().run()
    assert at.session_state["blog_page"] == 2

    at.selectbox(key="blog_tag").select("news").run()

    assert at.session_state["calls"][-1] == ("news", 1)
    assert not at.info
