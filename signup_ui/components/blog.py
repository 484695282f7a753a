"""Public blog component."""

import streamlit as st
from typing import Dict

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.models import SORT_ORDERS
from signup_ui.utils.ui import page_controls, reset_page, show_api_error, step_back_from_empty_page

SELECTED_POST_KEY = "blog_selected_slug"
PAGE_KEY = "blog_page"


def _open_post(slug: str) -> None:
    st.session_state[SELECTED_POST_KEY] = slug


def _post_card(post: Dict, key_prefix: str) -> None:
    """Render a post teaser with a button to open it."""
    if post.get("coverImageUrl"):
        st.image(post["coverImageUrl"])
    st.markdown(f"### {post.get('title', '')}")
    meta = post.get("publishedAt") or post.get("createdAt") or ""
    tags = " ".join(f"`{t}`" for t in post.get("tags", []))
    st.caption(f"{meta} {tags}".strip())
    if post.get("excerpt"):
        st.write(post["excerpt"])
    st.button("Read more", key=f"{key_prefix}_{post['slug']}", on_click=_open_post, args=(post["slug"],))


def blog_post_ui(client: ApiClient, slug: str) -> None:
    """Show a single post and its related posts."""
    if st.button("← Back to all posts"):
        st.session_state.pop(SELECTED_POST_KEY, None)
        st.rerun()

    with st.spinner("Loading post…"):
        try:
            result = client.get_blog(slug)
        except ApiError as e:
            show_api_error(e, prefix="Could not load post: ")
            return

    post = result["post"]
    st.title(post.get("title", ""))
    if post.get("coverImageUrl"):
        st.image(post["coverImageUrl"])
    st.caption(post.get("publishedAt") or post.get("createdAt") or "")
    st.markdown(post.get("contentMarkdown", ""))

    related = result.get("related") or []
    if related:
        st.write("---")
        st.markdown("#### Related posts")
        for item in related:
            _post_card(item, "related")


def blog_ui(client: ApiClient) -> None:
    """UI for browsing published blog posts.

    Args:
        client: API client for this browser session
    """
    slug = st.session_state.get(SELECTED_POST_KEY)
    if slug:
        blog_post_ui(client, slug)
        return

    st.subheader("Blog")

    try:
        tags = client.list_blog_tags().get("items", [])
    except ApiError as e:
        show_api_error(e, prefix="Could not load tags: ")
        tags = []

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        q = st.text_input("🔍 Search posts", key="blog_q", on_change=reset_page(PAGE_KEY))
    with col2:
        counts = {t["tag"]: t["count"] for t in tags}
        tag = st.selectbox(
            "Tag",
            options=[""] + list(counts),
            format_func=lambda t: f"{t} ({counts[t]})" if t else "All tags",
            key="blog_tag",
            on_change=reset_page(PAGE_KEY),
        )
    with col3:
        sort = st.selectbox("Sort", options=SORT_ORDERS, key="blog_sort", on_change=reset_page(PAGE_KEY))

    page = st.session_state.get(PAGE_KEY, 1)
    with st.spinner("Loading posts…"):
        try:
            result = client.list_blog(q=q, tag=tag, sort=sort, page=page, page_size=10)
        except ApiError as e:
            show_api_error(e, prefix="Could not load posts: ")
            return

    items = result.get("items", [])
    if not items:
        if step_back_from_empty_page(PAGE_KEY, page, result.get("pages", 1)):
            st.rerun()
        st.info("No posts found.")
        return

    for post in items:
        _post_card(post, "list")
        st.write("---")

    new_page = page_controls("blog", result.get("page", page), result.get("pages", 1), result.get("total", 0))
    if new_page != page:
        st.session_state[PAGE_KEY] = new_page
        st.rerun()
