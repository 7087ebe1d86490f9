"""
Panel-side session: holds the extracted page, talks to the summary service
and keeps the rendered result.

One `PanelSession` per open panel. At most one summarize request is in
flight; extra triggers while it runs do nothing.
"""
import logging
from enum import Enum
from typing import Any, Callable, Awaitable, Dict, Optional

import httpx
from pydantic import ValidationError

from jobsummary.bridge import CLOSE_SIDEBAR, JOB_DATA, REQUEST_JOB_DATA, Frame, Message
from jobsummary.errors import ServiceRequestError, SummaryError
from jobsummary.models import ExtractionResult, SummaryOptions, SummaryResult
from jobsummary.render import render_summary_html
from jobsummary.settings import settings
from jobsummary.summary_tools import normalize_summary
from jobsummary.validation import MIN_JOB_TEXT

logger = logging.getLogger(__name__)

NOT_ENOUGH_CONTENT = "Not enough content detected on this page. Please navigate to a job posting."
GENERIC_FAILURE = "Failed to generate summary. Please try again."


class PanelState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class PanelSession:
    def __init__(
        self,
        frame: Optional[Frame] = None,
        api_base_url: Optional[str] = None,
        options: Optional[SummaryOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.frame = frame
        self.api_base_url = (api_base_url or settings.api_base_url).rstrip("/")
        self.options = options or SummaryOptions()
        self.timeout = timeout or settings.request_timeout
        self._http_client = http_client

        self.state = PanelState.IDLE
        self.job_data: Optional[ExtractionResult] = None
        self.summary: Optional[SummaryResult] = None
        self.html: str = ""
        self.error_message: Optional[str] = None
        self.in_flight = False
        self._last_action: Optional[Callable[[], Awaitable[Any]]] = None

    # --- messaging ---

    def attach(self, frame: Frame) -> None:
        """Start listening on the panel frame and ask the page for its data."""
        self.frame = frame
        frame.add_listener(self.handle_message)
        self.request_job_data()

    def handle_message(self, message: Message) -> None:
        if self.frame is None or message.source is not self.frame.parent:
            return
        if message.data.get("type") != JOB_DATA:
            return
        try:
            self.receive_job_data(message.data.get("data"))
        except ValidationError as exc:
            logger.warning("Dropped malformed job data: %s", exc)

    def _post_to_page(self, data: Dict[str, Any]) -> None:
        if self.frame is not None and self.frame.parent is not None:
            self.frame.parent.post_message(data, source=self.frame)

    def request_job_data(self) -> None:
        self._post_to_page({"type": REQUEST_JOB_DATA})

    def close(self) -> None:
        self._post_to_page({"type": CLOSE_SIDEBAR})

    def receive_job_data(self, data: Any) -> None:
        self.job_data = data if isinstance(data, ExtractionResult) else ExtractionResult.model_validate(data)
        logger.info("Received job data: %s", self.job_data.title)

    # --- actions ---

    @property
    def can_summarize(self) -> bool:
        return self.job_data is not None and not self.in_flight

    def set_options(self, **changes: Any) -> SummaryOptions:
        self.options = SummaryOptions(**{**self.options.model_dump(), **changes})
        return self.options

    async def summarize(self) -> Optional[SummaryResult]:
        if self.job_data is None or self.in_flight:
            return None
        self._last_action = self.summarize

        if len(self.job_data.content.strip()) < MIN_JOB_TEXT:
            self._show_error(NOT_ENOUGH_CONTENT)
            return None

        # set before the first await so a second trigger sees it
        self.in_flight = True
        self.state = PanelState.LOADING
        options = self.options
        try:
            summary = await self.call_summarize_api(self.job_data.content, options)
        except (SummaryError, httpx.HTTPError) as exc:
            logger.error("Summarize request failed: %s", exc)
            self._show_error(str(exc) or GENERIC_FAILURE)
            return None
        finally:
            self.in_flight = False

        self._show_summary(summary, options)
        return summary

    async def retry(self) -> Optional[SummaryResult]:
        if self._last_action is None:
            return None
        return await self._last_action()

    async def call_summarize_api(self, job_text: str, options: SummaryOptions) -> SummaryResult:
        body = {"jobText": job_text, **options.model_dump()}
        if self._http_client is not None:
            response = await self._http_client.post(f"{self.api_base_url}/summarize", json=body)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.api_base_url}/summarize", json=body)

        if not response.is_success:
            raise ServiceRequestError(_error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceRequestError(GENERIC_FAILURE, status_code=response.status_code) from exc
        summary = data.get("summary") if isinstance(data, dict) else None
        return normalize_summary(summary if isinstance(summary, dict) else {})

    # --- view state ---

    def _show_error(self, message: str) -> None:
        self.state = PanelState.ERROR
        self.error_message = message
        self.summary = None
        self.html = ""

    def _show_summary(self, summary: SummaryResult, options: SummaryOptions) -> None:
        self.state = PanelState.SUCCESS
        self.error_message = None
        self.summary = summary
        self.html = render_summary_html(summary, options.format)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = {}
    error = data.get("error") if isinstance(data, dict) else None
    return error or f"HTTP {response.status_code}: {response.reason_phrase}"
