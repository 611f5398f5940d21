"""
Headless HTML → PDF conversion (Playwright / Chromium).

Each conversion acquires its own browser and releases it on every exit
path, including cancellation by the pipeline's render timeout. No
browser state is shared between requests.

Network access during conversion is limited to the resource classes a
printed page needs (document, stylesheet, image, font). Every other
request (scripts, XHR, websockets, ...) is aborted so the renderer
cannot make arbitrary outbound calls or stall on unrelated resources.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, FrozenSet, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Route, async_playwright

from docgen.app.core.config import Settings
from docgen.app.core.errors import RenderError, RendererUnavailableError

logger = logging.getLogger(__name__)

ALLOWED_RESOURCE_TYPES: FrozenSet[str] = frozenset(
    {"document", "stylesheet", "image", "font"}
)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class PdfRenderer(Protocol):
    """
    Interface for converting rendered HTML into PDF bytes.

    Implementations must release every resource they acquire before
    returning or raising, and must raise RendererUnavailableError for
    environment problems and RenderError for conversion failures.
    """

    async def render_pdf(self, html: str) -> bytes:
        ...


async def _filter_resource(route: Route) -> None:
    if route.request.resource_type in ALLOWED_RESOURCE_TYPES:
        await route.continue_()
    else:
        await route.abort()


def _references_images(html: str) -> bool:
    return "<img" in html or "background-image" in html


class PlaywrightPdfRenderer:
    """Chromium-backed PdfRenderer with a fixed render configuration."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.timeout_ms = settings.render_timeout_seconds * 1000

    def _launch_options(self) -> dict:
        options = {"headless": True, "args": BROWSER_ARGS}
        executable = self.settings.browser_executable_path
        if executable is not None:
            if executable.exists():
                options["executable_path"] = str(executable)
            else:
                logger.warning(
                    "browser_executable_missing",
                    extra={"executable_path": str(executable)},
                )
        return options

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Scoped browser page; the browser is closed on every exit path."""
        try:
            playwright = await async_playwright().start()
        except Exception as exc:
            raise RendererUnavailableError(
                f"Failed to start the Playwright driver: {exc}"
            ) from exc

        try:
            try:
                browser = await playwright.chromium.launch(**self._launch_options())
            except Exception as exc:
                raise RendererUnavailableError(
                    f"Failed to launch headless Chromium: {exc}. "
                    "Install a browser with 'playwright install chromium' "
                    "or set DOCGEN_BROWSER_EXECUTABLE_PATH."
                ) from exc

            try:
                try:
                    context = await browser.new_context(
                        viewport={
                            "width": self.settings.viewport_width,
                            "height": self.settings.viewport_height,
                        },
                        device_scale_factor=self.settings.device_scale_factor,
                    )
                    page = await context.new_page()
                    page.set_default_navigation_timeout(self.timeout_ms)
                    page.set_default_timeout(self.timeout_ms)
                    await page.route("**/*", _filter_resource)
                except PlaywrightError as exc:
                    raise RenderError(f"Failed to prepare browser page: {exc}") from exc
                yield page
            finally:
                await browser.close()
        finally:
            await playwright.stop()

    async def _establish_base_url(self, page: Page) -> None:
        base_url = self.settings.internal_base_url
        if not base_url:
            return
        try:
            await page.goto(f"{base_url}/api/health", wait_until="domcontentloaded")
            logger.debug("renderer_base_url_set", extra={"base_url": base_url})
        except PlaywrightError:
            logger.warning(
                "renderer_base_url_unreachable",
                extra={"base_url": base_url},
            )

    async def render_pdf(self, html: str) -> bytes:
        async with self.page() as page:
            try:
                await self._establish_base_url(page)

                wait_until = "networkidle" if _references_images(html) else "domcontentloaded"
                await page.set_content(html, wait_until=wait_until)

                return await page.pdf(
                    format="A4",
                    print_background=True,
                    prefer_css_page_size=True,
                    scale=1,
                )
            except PlaywrightError as exc:
                raise RenderError(f"PDF conversion failed: {exc}") from exc
