import asyncio
import html
import logging

from playwright.async_api import async_playwright

from domain.errors import RenderFailed

logger = logging.getLogger(__name__)

PDF_MARGIN = {"top": "20mm", "right": "20mm", "bottom": "20mm", "left": "20mm"}

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{
      font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
      line-height: 1.6;
      color: #333;
      max-width: 800px;
      margin: 0 auto;
      padding: 20px;
    }}
    h1 {{
      font-size: 28px;
      margin-top: 0;
      text-align: center;
      color: #1a252f;
      border-bottom: 3px solid #3498db;
      padding-bottom: 10px;
      margin-bottom: 20px;
      font-weight: 600;
    }}
    strong {{ color: #2c3e50; font-weight: 600; }}
    @media print {{
      body {{ margin: 0; padding: 15px; }}
      h1 {{ page-break-after: avoid; }}
    }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <div>{body}</div>
</body>
</html>
"""


def build_html(content: str, title: str) -> str:
    body = html.escape(content).replace("\r\n", "\n").replace("\n", "<br>")
    return HTML_TEMPLATE.format(title=html.escape(title), body=body)


class PdfRenderer:
    """HTML -> PDF through headless Chromium.

    Each render launches its own browser; ``max_concurrency`` caps how many
    run at once and ``timeout`` bounds a single render including the wait
    for a free slot.
    """

    def __init__(self, max_concurrency: int = 2, timeout: float = 30.0):
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))
        self.timeout = timeout

    async def _render_html(self, document: str) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page()
                await page.set_content(document)
                return await page.pdf(format="A4", print_background=True, margin=PDF_MARGIN)
            finally:
                await browser.close()

    async def _bounded(self, document: str) -> bytes:
        async with self._semaphore:
            return await self._render_html(document)

    async def render(self, content: str, title: str) -> bytes:
        try:
            return await asyncio.wait_for(self._bounded(build_html(content, title)), self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("PDF rendering of %r timed out after %.0fs", title, self.timeout)
            raise RenderFailed("Failed to generate PDF: rendering timed out") from exc
        except Exception as exc:
            logger.exception("PDF rendering of %r failed", title)
            raise RenderFailed("Failed to generate PDF") from exc
