import io
from types import SimpleNamespace

import pandas as pd
import pytest
from docx import Document
from fastapi.testclient import TestClient
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

import config
import main
import model
from session import SessionStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def pdf_bytes():
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=letter)
    for text in ("Hello page one", "Second page text"):
        pdf.drawString(72, 720, text)
        pdf.showPage()
    pdf.save()
    return buf.getvalue()


@pytest.fixture
def two_line_pdf_bytes():
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=letter)
    pdf.drawString(72, 720, "Line one")
    pdf.drawString(72, 700, "Line two")
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


@pytest.fixture
def docx_bytes():
    doc = Document()
    doc.add_paragraph("Quarterly report")
    doc.add_paragraph("Revenue grew by ten percent.")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Region"
    table.rows[0].cells[1].text = "North"
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def xlsx_bytes():
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame([["name", "qty"], ["apple", 3], ["pear", 5]]).to_excel(
            writer, sheet_name="Fruit", header=False, index=False
        )
        pd.DataFrame([["city", "country", "zone"], ["Paris", "France", None]]).to_excel(
            writer, sheet_name="Places", header=False, index=False
        )
    return buf.getvalue()


class FakeGemini:
    """Stands in for genai.GenerativeModel; records every prompt it receives."""

    prompts = []
    answer = "It is about fruit."
    error = None

    def __init__(self, model_name):
        self.model_name = model_name

    async def generate_content_async(self, prompt):
        FakeGemini.prompts.append(prompt)
        if FakeGemini.error:
            raise FakeGemini.error
        parts = [FakeGemini.answer] if FakeGemini.answer else []
        return SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))],
            text=FakeGemini.answer,
        )


@pytest.fixture
def gemini(monkeypatch):
    FakeGemini.prompts = []
    FakeGemini.answer = "It is about fruit."
    FakeGemini.error = None
    monkeypatch.setattr(config, "GEMINI_KEY", "test-key")
    monkeypatch.setattr(model.genai, "GenerativeModel", FakeGemini)
    return FakeGemini


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "sessions", SessionStore())
    with TestClient(main.app) as test_client:
        yield test_client
