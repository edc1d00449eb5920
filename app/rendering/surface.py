import io
from abc import ABC, abstractmethod

import mammoth
from PIL import Image
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from app.logging.logger import Log
from app.processor.exceptions import RenderError

_HTML_SHELL = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  html, body {{ margin: 0; padding: 0; background: #ffffff; }}
  .docx-wrapper {{ width: {width}px; box-sizing: border-box; padding: 48px 56px;
                   font-family: "Times New Roman", serif; font-size: 11pt; color: #000; }}
  .docx-wrapper table {{ border-collapse: collapse; width: 100%; }}
  .docx-wrapper td, .docx-wrapper th {{ vertical-align: top; padding: 2px 4px; }}
  .docx-wrapper img {{ max-width: 100%; }}
</style>
</head>
<body><div class="docx-wrapper">{body}</div></body>
</html>"""

# Fonts and every <img> finished loading.
_READY_CHECK = (
    "() => document.fonts.status === 'loaded' && "
    "Array.from(document.images).every((img) => img.complete)"
)


class BaseRenderSurface(ABC):
    """Contract for off-screen surfaces that rasterize a .docx into one bitmap."""

    @abstractmethod
    def capture(self, docx_bytes: bytes) -> Image.Image:
        """Render the whole document and return it as a single RGB bitmap.

        Raises:
            RenderError: if the document cannot be rendered or captured.
        """


class BrowserRenderSurface(BaseRenderSurface):
    """Converts the .docx to HTML with mammoth and screenshots it in headless Chromium."""

    def __init__(
        self,
        viewport_width: int = 800,
        device_scale: int = 3,
        settle_timeout_ms: int = 15000,
    ) -> None:
        self._viewport_width = viewport_width
        self._device_scale = device_scale
        self._settle_timeout_ms = settle_timeout_ms

    def capture(self, docx_bytes: bytes) -> Image.Image:
        html = self.to_html(docx_bytes)
        try:
            png = self._screenshot(html)
        except PlaywrightError as exc:
            raise RenderError(f"Browser rendering failed: {exc}") from exc
        with Image.open(io.BytesIO(png)) as image:
            return image.convert("RGB")

    def to_html(self, docx_bytes: bytes) -> str:
        try:
            result = mammoth.convert_to_html(io.BytesIO(docx_bytes))
        except Exception as exc:
            raise RenderError(f"Cannot convert document to HTML: {exc}") from exc
        for message in result.messages:
            Log.debug(f"mammoth: {message.message}")
        return _HTML_SHELL.format(width=self._viewport_width, body=result.value)

    def _screenshot(self, html: str) -> bytes:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch()
            try:
                page = browser.new_page(
                    viewport={"width": self._viewport_width, "height": 1131},
                    device_scale_factor=self._device_scale,
                )
                page.set_content(
                    html,
                    wait_until="networkidle",
                    timeout=self._settle_timeout_ms,
                )
                self._wait_until_ready(page)
                return page.screenshot(full_page=True, type="png")
            finally:
                browser.close()

    def _wait_until_ready(self, page) -> None:  # type: ignore[no-untyped-def]
        try:
            page.wait_for_function(_READY_CHECK, timeout=self._settle_timeout_ms)
        except PlaywrightTimeoutError:
            Log.warning(
                f"Resources not settled after {self._settle_timeout_ms} ms; capturing anyway"
            )
