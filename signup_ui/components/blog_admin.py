"""Blog CMS component for the admin panel."""

import streamlit as st
from typing import Dict, Optional

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.forms import clean_optional, parse_tags
from signup_ui.utils.models import BLOG_STATUS_FILTERS, SORT_ORDERS
from signup_ui.utils.ui import (
    SUPPORTED_IMAGE_FORMATS,
    flash,
    page_controls,
    reset_page,
    set_confirmation,
    show_api_error,
    show_flash,
    step_back_from_empty_page,
    want_confirmation,
)

PAGE_KEY = "admin_blog_page"
EDITING_KEY = "admin_blog_editing"
NEW_POST = "__new__"


def _post_form(client: ApiClient, post: Optional[Dict]) -> None:
    """Create or edit form; ``post`` is None for a new post."""
    form_id = post["id"] if post else NEW_POST
    post = post or {}

    cover = st.file_uploader("Cover image", type=SUPPORTED_IMAGE_FORMATS, key=f"cover_{form_id}")
    cover_url = post.get("coverImageUrl") or ""
    if cover is not None and st.button("⬆️ Upload cover", key=f"upload_{form_id}"):
        with st.spinner("Uploading image…"):
            try:
                cover_url = client.admin_upload_image(cover)["url"]
            except ApiError as e:
                show_api_error(e, prefix="Upload failed: ")
            else:
                st.session_state[f"cover_url_{form_id}"] = cover_url
                st.success("Image uploaded")
    cover_url = st.session_state.get(f"cover_url_{form_id}", cover_url)
    if cover_url:
        st.image(cover_url, width=240)

    with st.form(f"post_form_{form_id}"):
        title = st.text_input("Title", value=post.get("title", ""))
        slug = st.text_input("Slug (leave blank to derive from title)", value=post.get("slug", ""))
        excerpt = st.text_area("Excerpt", value=post.get("excerpt", ""), height=80)
        content = st.text_area("Content (Markdown)", value=post.get("contentMarkdown", ""), height=300)
        tags = st.text_input("Tags (comma separated)", value=", ".join(post.get("tags", [])))
        cover_url = st.text_input("Cover image URL", value=cover_url)
        published = st.checkbox("Published", value=post.get("published", False))
        submitted = st.form_submit_button("Save post")

    if not submitted:
        return
    if not title.strip() or not content.strip():
        st.error("Title and content are required")
        return

    payload = {
        "title": title.strip(),
        "excerpt": excerpt.strip(),
        "contentMarkdown": content,
        "coverImageUrl": clean_optional(cover_url),
        "tags": parse_tags(tags),
        "published": published,
    }
    if slug.strip():
        payload["slug"] = slug.strip()

    try:
        if form_id == NEW_POST:
            result = client.admin_create_blog(payload)
        else:
            result = client.admin_update_blog(form_id, payload)
    except ApiError as e:
        show_api_error(e, prefix="Save failed: ")
        return

    st.session_state.pop(f"cover_url_{form_id}", None)
    st.session_state.pop(EDITING_KEY, None)
    flash(f"Saved '{result['post']['title']}'")
    st.rerun()


def _delete_post(client: ApiClient, post: Dict) -> None:
    action_id = f"delete_post_{post['id']}"
    if st.button("🗑️ Delete", key=action_id):
        set_confirmation(action_id, True)

    if want_confirmation(action_id):
        st.warning(f"⚠️ Really delete **{post['title']}**?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Cancel", key=f"cancel_{action_id}"):
                set_confirmation(action_id, False)
        with col2:
            if st.button("✓ Confirm Delete", key=f"do_{action_id}", type="primary"):
                set_confirmation(action_id, False)
                try:
                    client.admin_delete_blog(post["id"])
                except ApiError as e:
                    show_api_error(e, prefix="Delete failed: ")
                    return
                flash(f"Deleted '{post['title']}'")
                st.rerun()


def manage_blog_ui(client: ApiClient) -> None:
    """UI for writing, publishing and deleting blog posts.

    Args:
        client: API client carrying the admin session
    """
    st.subheader("Blog posts")
    show_flash()

    if st.button("➕ New post"):
        st.session_state[EDITING_KEY] = NEW_POST
    if st.session_state.get(EDITING_KEY) == NEW_POST:
        with st.expander("New post", expanded=True):
            _post_form(client, None)

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        q = st.text_input("🔍 Search posts", key="admin_blog_q", on_change=reset_page(PAGE_KEY))
    with col2:
        status = st.selectbox("Status", options=BLOG_STATUS_FILTERS, key="admin_blog_status", on_change=reset_page(PAGE_KEY))
    with col3:
        sort = st.selectbox("Sort", options=SORT_ORDERS, key="admin_blog_sort", on_change=reset_page(PAGE_KEY))
    tag = st.text_input("Tag", key="admin_blog_tag", on_change=reset_page(PAGE_KEY))

    page = st.session_state.get(PAGE_KEY, 1)
    with st.spinner("Loading posts..."):
        try:
            result = client.admin_list_blog(q=q, tag=tag.strip(), status=status, sort=sort, page=page, page_size=20)
        except ApiError as e:
            show_api_error(e, prefix="Failed to load posts: ")
            return

    items = result.get("items", [])
    if not items:
        if step_back_from_empty_page(PAGE_KEY, page, result.get("pages", 1)):
            st.rerun()
        st.info("No posts yet.")
        return

    for post in items:
        badge = "🟢 Published" if post.get("published") else "📝 Draft"
        with st.expander(f"{post.get('title', '')} · {badge}"):
            st.caption(f"/{post.get('slug', '')} · {', '.join(post.get('tags', []))}")
            if post.get("newsletterStatus"):
                st.caption(f"Newsletter: {post['newsletterStatus']}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("✏️ Edit", key=f"edit_{post['id']}"):
                    st.session_state[EDITING_KEY] = post["id"]
            with col2:
                _delete_post(client, post)
            if st.session_state.get(EDITING_KEY) == post["id"]:
                _post_form(client, post)

    new_page = page_controls("admin_blog", result.get("page", page), result.get("pages", 1), result.get("total", 0))
    if new_page != page:
        st.session_state[PAGE_KEY] = new_page
        st.rerun()
