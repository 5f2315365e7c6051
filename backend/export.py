# export.py
import io
from docx import Document
from fastapi.responses import StreamingResponse

import config
from schemas import Speaker

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def transcript_docx(transcript, source=None):
    """Renders the chat transcript as a Word document and returns its bytes."""
    doc = Document()
    doc.add_heading(config.APP_TITLE, 0)
    if source:
        doc.add_paragraph(f"Source: {source}")
    for turn in transcript:
        role = "User" if turn.speaker == Speaker.USER else "Assistant"
        doc.add_heading(role, level=1)
        doc.add_paragraph(turn.text)

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def word(transcript, source=None):
    """Streams the transcript as a downloadable .docx file."""
    buf = io.BytesIO(transcript_docx(transcript, source))
    return StreamingResponse(
        buf,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="transcript.docx"'},
    )
