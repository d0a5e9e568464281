"""Headless-browser work: PDF rendering for tickets and season passes, and
loading JavaScript-rendered pages for the roster scraper.

One browser per document: launched, used and closed within the call.
The first launch honours the configured channel; if that fails a second
launch with sandboxing disabled is tried before giving up.
"""

import logging

from playwright.async_api import Browser, Playwright, async_playwright

from clubhub.config import settings

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1600, "height": 700}
DEVICE_SCALE_FACTOR = 2
CONTENT_TIMEOUT_MS = 15000

FALLBACK_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-gpu",
]


class PDFGenerationError(RuntimeError):
    pass


async def _launch(playwright: Playwright) -> Browser:
    try:
        browser = await playwright.chromium.launch(
            channel=settings.pdf_browser_channel, headless=settings.playwright_headless
        )
        logger.info("Browser launched for PDF rendering")
        return browser
    except Exception as e:
        logger.warning("Primary browser launch failed: %s", e)
    try:
        browser = await playwright.chromium.launch(headless=True, args=FALLBACK_ARGS)
        logger.info("Browser launched with fallback arguments")
        return browser
    except Exception as e:
        logger.error("Fallback browser launch failed: %s", e)
        raise PDFGenerationError("Could not launch browser for PDF generation") from e


async def render_pdf(html: str, width: str = "1600px", height: str = "700px") -> bytes:
    """Print an HTML document to PDF bytes"""
    async with async_playwright() as playwright:
        browser = await _launch(playwright)
        try:
            context = await browser.new_context(viewport=VIEWPORT, device_scale_factor=DEVICE_SCALE_FACTOR)
            page = await context.new_page()
            await page.set_content(html, wait_until="networkidle", timeout=CONTENT_TIMEOUT_MS)
            # Fonts and the inline QR image must be decoded before printing
            await page.evaluate("() => document.fonts.ready.then(() => true)")
            pdf_bytes = await page.pdf(
                width=width,
                height=height,
                print_background=True,
                prefer_css_page_size=True,
                margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
            )
            logger.info("PDF generated (%d bytes)", len(pdf_bytes))
            return pdf_bytes
        except PDFGenerationError:
            raise
        except Exception as e:
            raise PDFGenerationError(f"PDF rendering failed: {e}") from e
        finally:
            await browser.close()


async def fetch_rendered_html(url: str, timeout_ms: int = 30000) -> str:
    """Load a JavaScript-rendered page and return its final HTML (roster pages)"""
    async with async_playwright() as playwright:
        browser = await _launch(playwright)
        try:
            page = await browser.new_page(user_agent=settings.scraper_user_agent)
            await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            return await page.content()
        finally:
            await browser.close()
