import json
import re
from pathlib import Path
from typing import Callable, List, Tuple, Union

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.settings import Settings

TXT = "text/plain"
PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_CV_BLOCK = re.compile(r"CV (\d+) \((.+?)\):\n(.*?)\n---", re.S)


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeLLM:
    """Stands in for LLMClient; ``reply`` is a string or a prompt -> string callable."""

    def __init__(self, reply: Union[str, Callable[[str], str], Exception]):
        self.reply = reply
        self.calls: List[Tuple[str, float]] = []

    async def complete(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply(prompt) if callable(self.reply) else self.reply


class FakePdfRenderer:
    def __init__(self):
        self.calls = []

    async def render(self, content: str, title: str) -> bytes:
        self.calls.append((content, title))
        return b"%PDF-1.4\n% fake\n"


def ranking_model(prompt: str) -> str:
    """Scores every CV found in the prompt, naming Jane Doe where she appears."""
    rankings = []
    for index, filename, text in _CV_BLOCK.findall(prompt):
        name = "Jane Doe" if "Jane Doe" in text else "Not provided"
        rankings.append({
            "filename": filename,
            "candidateName": name,
            "phone": "555-0100" if "555-0100" in text else "Not provided",
            "email": "jane@x.com" if "jane@x.com" in text else "Not provided",
            "score": 90 - 10 * int(index),
            "explanation": f"Assessment of {filename}",
            "advantages": ["Java experience"],
            "disadvantages": [],
        })
    return json.dumps({"rankings": rankings}, indent=2)


def generation_model(prompt: str) -> str:
    count = int(re.search(r"Generate exactly (\d+)", prompt).group(1))
    cvs = [{"title": f"CV {i} - Focus {i}", "content": f"# Candidate {i}\\n## Skills\\nJava"}
           for i in range(1, count + 1)]
    return json.dumps({"cvs": cvs})


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        UPLOAD_DIR=str(tmp_path / "uploads"),
        STATIC_DIR="",
        OPENAI_API_KEY="test-key",
        OPENROUTER_API_KEY=None,
        LLM_BACKOFF_SECONDS=0,
        LLM_MAX_ATTEMPTS=3,
    )


@pytest.fixture
def upload_root(settings) -> Path:
    return Path(settings.UPLOAD_DIR)


def stored_files(root) -> list:
    return [p for p in root.rglob("*")] if root.exists() else []


@pytest.fixture
def make_client(settings):
    def _make(llm=None, renderer=None) -> TestClient:
        app = create_app(settings=settings, llm_client=llm or FakeLLM(ranking_model),
                         pdf_renderer=renderer or FakePdfRenderer())
        return TestClient(app)
    return _make


def make_pdf(path, lines):
    from reportlab.pdfgen import canvas

    c = canvas.Canvas(str(path))
    y = 800
    for line in lines:
        c.drawString(72, y, line)
        y -= 20
    c.save()
    return path


def make_docx(path, paragraphs, table_rows=()):
    from docx import Document

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    doc.save(str(path))
    return path
