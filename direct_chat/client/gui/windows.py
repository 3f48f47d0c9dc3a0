"""PyQt window classes for the direct chat GUI."""
from __future__ import annotations

import html
import os
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from ..config import BACKEND_URL_ENV, resolve_backend_url
from ..formatting import avatar_color, conversation_title, format_time, initials, preview_text
from ..session import BootstrapStatus, SessionState, ThreadStatus
from ..storage import get_server_url
from .app import ChatBridge
from .styles import (
    ACCENT,
    ACCENT_HOVER,
    APP_BG,
    AVATAR_SIZE,
    BORDER_RADIUS,
    BUBBLE_MINE,
    BUBBLE_THEIRS,
    PADDING,
    PANEL_BORDER,
    SIDEBAR_BG,
    TEXT_MUTED,
    TEXT_PRIMARY,
)


class ServerConfigDialog(QDialog):
    """Dialog used to collect the backend URL on first launch."""

    def __init__(self, parent: QWidget | None = None, prefill: str | None = None):
        super().__init__(parent)
        self.setWindowTitle("Backend configuration")
        layout = QFormLayout(self)
        self.url_input = QLineEdit(prefill or resolve_backend_url())
        layout.addRow("Backend URL", self.url_input)
        btn = QPushButton("Save & connect")
        btn.clicked.connect(self.accept)
        layout.addWidget(btn)

    def server_url(self) -> str:
        return self.url_input.text().strip()


class Avatar(QLabel):
    """Round badge showing a name's initials."""

    def __init__(self, size: int = AVATAR_SIZE, parent: QWidget | None = None):
        super().__init__(parent)
        self._size = size
        self.setFixedSize(size, size)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.set_name(None)

    def set_name(self, name: Optional[str]) -> None:
        self.setText(initials(name))
        self.setStyleSheet(
            f"background: {avatar_color(name)}; color: white; font-weight: bold;"
            f" border-radius: {self._size // 2}px;"
        )


class MainChatWindow(QMainWindow):
    """Sidebar with the conversation list, active thread and compose line."""

    state_changed = pyqtSignal(object)

    def __init__(self, bridge: ChatBridge):
        super().__init__()
        self.bridge = bridge
        self._submitted: Optional[str] = None
        self.setWindowTitle("Direct Chat")
        self.resize(1024, 720)
        self._build_ui()
        self.state_changed.connect(self.render)
        self._unsubscribe = self.bridge.subscribe(self.state_changed.emit)
        self.render(self.bridge.state)

    def _build_ui(self) -> None:
        container = QWidget()
        layout = QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._build_sidebar(), 1)
        layout.addWidget(self._build_main_area(), 4)
        container.setStyleSheet(
            f"QWidget {{ background: {APP_BG}; color: {TEXT_PRIMARY}; }}\n"
            f"QLineEdit {{ background: {BUBBLE_THEIRS}; border: none; border-radius: {BORDER_RADIUS}px;"
            f" padding: 10px 14px; }}\n"
            f"QPushButton {{ background: {ACCENT}; color: white; padding: 8px 16px; border-radius: {BORDER_RADIUS}px; }}\n"
            f"QPushButton:hover {{ background: {ACCENT_HOVER}; }}"
        )
        self.setCentralWidget(container)

    def _build_sidebar(self) -> QWidget:
        widget = QWidget()
        widget.setStyleSheet(f"background: {SIDEBAR_BG}; border-right: 1px solid {PANEL_BORDER}")
        layout = QVBoxLayout(widget)
        layout.setContentsMargins(PADDING, PADDING, PADDING, PADDING)

        profile = QHBoxLayout()
        self.me_avatar = Avatar(AVATAR_SIZE)
        names = QVBoxLayout()
        self.me_name = QLabel("...")
        self.me_name.setStyleSheet("font-weight: bold")
        self.me_username = QLabel()
        self.me_username.setStyleSheet(f"color: {TEXT_MUTED}; font-size: 11px")
        names.addWidget(self.me_name)
        names.addWidget(self.me_username)
        profile.addWidget(self.me_avatar)
        profile.addLayout(names)
        profile.addStretch()
        layout.addLayout(profile)

        chats_label = QLabel("CHATS")
        chats_label.setStyleSheet(f"color: {TEXT_MUTED}; font-size: 11px")
        layout.addWidget(chats_label)

        self.chat_list = QListWidget()
        self.chat_list.itemClicked.connect(self._chat_clicked)
        layout.addWidget(self.chat_list, 1)
        return widget

    def _build_main_area(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.setContentsMargins(PADDING, PADDING, PADDING, PADDING)

        header = QHBoxLayout()
        self.header_avatar = Avatar(AVATAR_SIZE)
        titles = QVBoxLayout()
        self.chat_title = QLabel("...")
        self.chat_title.setStyleSheet("font-size: 16px; font-weight: bold")
        subtitle = QLabel("Direct Message")
        subtitle.setStyleSheet(f"color: {TEXT_MUTED}; font-size: 11px")
        titles.addWidget(self.chat_title)
        titles.addWidget(subtitle)
        header.addWidget(self.header_avatar)
        header.addLayout(titles)
        header.addStretch()
        layout.addLayout(header)

        self.messages_view = QTextEdit()
        self.messages_view.setReadOnly(True)
        layout.addWidget(self.messages_view, 1)

        self.status_label = QLabel()
        self.status_label.setStyleSheet("color: #f87171")
        layout.addWidget(self.status_label)

        footer = QHBoxLayout()
        self.message_input = QLineEdit()
        self.message_input.setPlaceholderText("Write a message...")
        self.message_input.textEdited.connect(self.bridge.set_compose)
        self.message_input.returnPressed.connect(self._send_message)
        send_btn = QPushButton("Send")
        send_btn.clicked.connect(self._send_message)
        footer.addWidget(self.message_input, 1)
        footer.addWidget(send_btn)
        layout.addLayout(footer)
        return widget

    def render(self, state: SessionState) -> None:
        me = state.me
        self.me_avatar.set_name(me.display_name if me else None)
        self.me_name.setText(me.display_name if me else "...")
        self.me_username.setText(me.username if me else "")

        title = conversation_title(state.active_conversation, state.users, me)
        self.header_avatar.set_name(title if title != "..." else None)
        self.chat_title.setText(title)

        self._render_conversations(state)
        self._render_messages(state)
        if self._submitted is not None and state.compose_text == "" and self.message_input.text() == self._submitted:
            self.message_input.clear()
            self._submitted = None
        self.status_label.setText(self._status_text(state))

    def _status_text(self, state: SessionState) -> str:
        if state.bootstrap is BootstrapStatus.FAILED:
            return f"Could not start the chat: {state.bootstrap_error}"
        if state.bootstrap is not BootstrapStatus.READY:
            return "Connecting..."
        if state.last_error is not None:
            return str(state.last_error)
        return ""

    def _render_conversations(self, state: SessionState) -> None:
        self.chat_list.blockSignals(True)
        self.chat_list.clear()
        for convo in state.conversations:
            title = conversation_title(convo, state.users, state.me)
            item = QListWidgetItem(f"{title}\n{preview_text(convo)}")
            item.setData(Qt.ItemDataRole.UserRole, convo)
            self.chat_list.addItem(item)
            if convo.id == state.active_conversation_id:
                item.setSelected(True)
        self.chat_list.blockSignals(False)

    def _format_message(self, state: SessionState, msg) -> str:
        mine = state.me is not None and msg.sender_id == state.me.id
        align = "right" if mine else "left"
        bubble = BUBBLE_MINE if mine else BUBBLE_THEIRS
        text = html.escape(msg.content).replace("\n", "<br>")
        return (
            f'<div style="text-align:{align}; margin:6px 0;">'
            f'<span style="background:{bubble}; color:white; padding:8px;">{text}'
            f'<br><small style="color:{TEXT_MUTED}">{format_time(msg.created_at)}</small></span></div>'
        )

    def _render_messages(self, state: SessionState) -> None:
        if state.thread_status is ThreadStatus.LOADING and not state.messages:
            self.messages_view.setHtml(f'<p style="color:{TEXT_MUTED}">Loading...</p>')
            return
        self.messages_view.setHtml("".join(self._format_message(state, m) for m in state.messages))
        scrollbar = self.messages_view.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())

    def _chat_clicked(self, item: QListWidgetItem) -> None:
        conversation = item.data(Qt.ItemDataRole.UserRole)
        if conversation is not None:
            self.bridge.select_conversation(conversation)

    def _send_message(self) -> None:
        self._submitted = self.message_input.text()
        self.bridge.set_compose(self._submitted)
        self.bridge.submit()

    def closeEvent(self, event) -> None:  # noqa: N802
        self._unsubscribe()
        super().closeEvent(event)


class ChatApplication:
    """Top-level class wiring the bridge and the main window together."""

    def __init__(self):
        self.app = QApplication.instance() or QApplication([])
        self.bridge = ChatBridge()
        self.main_window: Optional[MainChatWindow] = None

    def _ensure_server_url(self) -> bool:
        if os.environ.get(BACKEND_URL_ENV) or get_server_url():
            return True
        dialog = ServerConfigDialog(prefill=self.bridge.base_url)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return False
        self.bridge.set_base_url(dialog.server_url())
        return True

    def run(self) -> int:
        if not self._ensure_server_url():
            return 0
        self.main_window = MainChatWindow(self.bridge)
        self.bridge.start()
        self.bridge.bootstrap()
        self.main_window.show()
        try:
            return self.app.exec()
        finally:
            self.bridge.stop()


__all__ = ["ChatApplication", "MainChatWindow", "ServerConfigDialog"]
