"""
Page <-> panel messaging.

The page hosts a `PageBridge`; the panel lives in its own `Frame`. Frames
talk only through `post_message`, and every receiver checks who sent a
message before acting on it.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from jobsummary.extractor import extract_job_text

logger = logging.getLogger(__name__)

TOGGLE_SIDEBAR = "toggleSidebar"
REQUEST_JOB_DATA = "REQUEST_JOB_DATA"
JOB_DATA = "JOB_DATA"
CLOSE_SIDEBAR = "CLOSE_SIDEBAR"

RESTRICTED_PREFIXES = ("chrome://", "edge://")


@dataclass
class Message:
    source: "Frame"
    data: Dict[str, Any]


Listener = Callable[[Message], None]


class Frame:
    """A window-like endpoint that receives posted messages."""

    def __init__(self, name: str, parent: Optional["Frame"] = None):
        self.name = name
        self.parent = parent
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def post_message(self, data: Dict[str, Any], source: "Frame") -> None:
        message = Message(source=source, data=data)
        for listener in list(self._listeners):
            listener(message)

    def __repr__(self) -> str:
        return f"Frame({self.name!r})"


def is_restricted_url(url: str) -> bool:
    return (url or "").startswith(RESTRICTED_PREFIXES)


@dataclass
class PageBridge:
    """Page-side half: owns the panel frame and feeds it extracted job data."""

    page_html: Callable[[], str]
    page_url: str = ""
    window: Frame = field(default_factory=lambda: Frame("page"))
    panel: Optional[Frame] = None
    visible: bool = False
    # called once with the new panel frame, like the panel document loading
    on_panel_created: Optional[Callable[[Frame], Any]] = None

    def __post_init__(self):
        self.window.add_listener(self.handle_window_message)

    def create_panel(self) -> Frame:
        if self.panel is None:
            self.panel = Frame("panel", parent=self.window)
            if self.on_panel_created is not None:
                self.on_panel_created(self.panel)
        return self.panel

    def show(self) -> None:
        self.create_panel()
        self.visible = True
        self.send_job_data()

    def hide(self) -> None:
        self.visible = False

    def toggle(self) -> None:
        if self.visible:
            self.hide()
        else:
            self.show()

    def send_job_data(self) -> None:
        if self.panel is None:
            return
        job_data = extract_job_text(self.page_html(), url=self.page_url)
        self.panel.post_message({"type": JOB_DATA, "data": job_data}, source=self.window)
        logger.debug("Job data sent to panel: %s", job_data.title)

    def handle_runtime_message(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Entry point for the toolbar action."""
        if request.get("action") == TOGGLE_SIDEBAR:
            self.toggle()
            return {"success": True}
        return {"success": False}

    def handle_window_message(self, message: Message) -> None:
        # only our own panel may drive the page
        if self.panel is None or message.source is not self.panel:
            return
        kind = message.data.get("type")
        if kind == CLOSE_SIDEBAR:
            self.hide()
        elif kind == REQUEST_JOB_DATA:
            self.send_job_data()


def toolbar_clicked(tab_url: str, bridge: PageBridge) -> Dict[str, Any]:
    """Toggle the panel on a tab, refusing browser-internal pages."""
    if is_restricted_url(tab_url):
        logger.warning("Cannot run on browser internal page %s", tab_url)
        return {"success": False}
    return bridge.handle_runtime_message({"action": TOGGLE_SIDEBAR})
