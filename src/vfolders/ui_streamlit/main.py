from __future__ import annotations

import sys
from pathlib import Path

import keyring
import streamlit as st
from dotenv import load_dotenv

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

load_dotenv(_SRC_ROOT.parent / ".env", override=False)

from vfolders.container import build_services
from vfolders.domain.models import FileEntry, FileUpload, FolderEntry, FolderTreeNode
from vfolders.domain.folder_tree import flatten_tree
from vfolders.settings import BLOB_STORE_BASE_URL, SQLITE_PATH, configure_logging

_KEYRING_SERVICE = "vfolders-blob-store"
_KEYRING_TOKEN = "access_token"
_ROOT_TARGET = "__root__"


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("services_key", None)
    st.session_state.setdefault("flash", None)


def _get_keyring_value(key: str) -> str | None:
    try:
        return keyring.get_password(_KEYRING_SERVICE, key)
    except Exception:
        return None


def _set_keyring_value(key: str, value: str) -> bool:
    try:
        keyring.set_password(_KEYRING_SERVICE, key, value)
        return True
    except Exception:
        return False


def _get_services(base_url: str, access_token: str, sqlite_path: str):
    services_key = (base_url, access_token, sqlite_path)
    if st.session_state["services"] is None or st.session_state["services_key"] != services_key:
        st.session_state["services"] = build_services(base_url, access_token, sqlite_path)
        st.session_state["services_key"] = services_key
    return st.session_state["services"]


def _flash(message: str) -> None:
    st.session_state["flash"] = message


def _run(action: str, func, *args) -> None:
    try:
        func(*args)
    except Exception as exc:
        st.error(f"{action} failed: {exc}")
        return
    _flash(f"{action} succeeded.")
    st.rerun()


def _target_options(nodes: list[FolderTreeNode]) -> dict[str, str]:
    options = {_ROOT_TARGET: "Root"}
    for node in flatten_tree(nodes):
        options[node.folder_id] = node.display_path
    return options


def _render_breadcrumbs(manager) -> None:
    crumbs = manager.breadcrumbs
    cols = st.columns(len(crumbs) + 1)
    for index, crumb in enumerate(crumbs):
        if cols[index].button(crumb.name, key=f"crumb_{index}"):
            manager.go_to_breadcrumb(index)
            st.rerun()
    if cols[-1].button("Up", disabled=len(crumbs) <= 1):
        manager.go_up()
        st.rerun()


def _render_folder(manager, entry: FolderEntry) -> None:
    folder = entry.folder
    cols = st.columns([6, 1])
    if cols[0].button(f"📁 {folder.name} ({entry.item_count})", key=f"open_{folder.folder_id}"):
        manager.open_folder(folder.folder_id, folder.name)
        st.rerun()
    with cols[1].popover("⋯"):
        new_name = st.text_input("Rename", value=folder.name, key=f"rename_{folder.folder_id}")
        if st.button("Save name", key=f"save_{folder.folder_id}"):
            _run("Rename folder", manager.rename_folder, folder.folder_id, new_name)

        search = st.text_input("Filter targets", key=f"search_{folder.folder_id}")
        options = _target_options(manager.move_targets(folder.folder_id, search=search))
        target = st.selectbox(
            "Move to",
            list(options),
            format_func=options.get,
            key=f"target_{folder.folder_id}",
        )
        if st.button("Move", key=f"move_{folder.folder_id}"):
            target_id = None if target == _ROOT_TARGET else target
            _run("Move folder", manager.move_folder, folder.folder_id, target_id)

        if st.button("Delete", key=f"delete_{folder.folder_id}", type="primary"):
            _run("Delete folder", manager.delete_folder, folder.folder_id)


def _render_file(manager, entry: FileEntry, all_targets: dict[str, str]) -> None:
    record = entry.file
    cols = st.columns([6, 1])
    label = entry.display_name
    if entry.is_renamed:
        label = f"{label} (was {record.name})"
    cols[0].markdown(f"📄 [{label}]({record.url}) · {record.mime_type} · {record.size} bytes")
    with cols[1].popover("⋯"):
        new_name = st.text_input("Rename", value=entry.display_name, key=f"frename_{record.file_id}")
        if st.button("Save name", key=f"fsave_{record.file_id}"):
            _run("Rename file", manager.rename_file, record.file_id, new_name)
        target = st.selectbox(
            "Move to",
            list(all_targets),
            format_func=all_targets.get,
            key=f"ftarget_{record.file_id}",
        )
        if st.button("Move", key=f"fmove_{record.file_id}"):
            target_id = None if target == _ROOT_TARGET else target
            _run("Move file", manager.move_file, record.file_id, target_id)
        if st.button("Delete", key=f"fdelete_{record.file_id}", type="primary"):
            _run("Delete file", manager.delete_file, record.file_id)


def main() -> None:
    configure_logging()
    st.set_page_config(page_title="File Manager", layout="wide")
    _init_state()
    st.title("File Manager")

    with st.sidebar:
        st.subheader("Blob Store")
        base_url = st.text_input("API base URL", value=BLOB_STORE_BASE_URL)
        access_token = st.text_input(
            "Access Token",
            value=_get_keyring_value(_KEYRING_TOKEN) or "",
            type="password",
        )
        if st.button("Remember token") and access_token:
            if not _set_keyring_value(_KEYRING_TOKEN, access_token):
                st.warning("The OS keychain is unavailable; the token is kept for this session only.")
        sqlite_path = st.text_input("SQLite Path", value=SQLITE_PATH)

    services = _get_services(base_url, access_token, sqlite_path)
    manager = services["file_manager_service"]

    if st.session_state.get("flash"):
        st.toast(st.session_state["flash"])
        st.session_state["flash"] = None

    _render_breadcrumbs(manager)

    with st.form("create_folder", clear_on_submit=True):
        folder_name = st.text_input("New folder name")
        if st.form_submit_button("Create folder"):
            _run("Create folder", manager.create_folder, folder_name)

    uploaded = st.file_uploader("Upload files", accept_multiple_files=True)
    if uploaded and st.button("Upload"):
        uploads = [
            FileUpload(
                filename=item.name,
                content=item.getvalue(),
                mime_type=item.type or "application/octet-stream",
            )
            for item in uploaded
        ]
        _run("Upload", manager.upload_files, uploads)

    listing = manager.refresh() or manager.listing
    if listing is None:
        st.info("Loading...")
        return
    if listing.error:
        st.error(listing.error)
    if not listing.items:
        st.info("This folder is empty.")
        return

    search = st.text_input("Search", key="item_search")
    visible = listing.matching(search)
    if not visible.items:
        st.info("No items match your search.")
        return

    all_targets = _target_options(services["folder_tree_service"].build_tree())
    for item in visible.items:
        if isinstance(item, FolderEntry):
            _render_folder(manager, item)
        else:
            _render_file(manager, item, all_targets)


if __name__ == "__main__":
    main()
