#main.py - The Central Router
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
import uvicorn

import config
import errors
import export
from schemas import AskReq, LinkReq, SessionView
from session import SessionStore

INDEX_HTML = Path(__file__).parent / "static" / "index.html"

app = FastAPI(title="DocChat")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

sessions = SessionStore()


@app.exception_handler(errors.DocChatError)
async def doc_chat_error(request: Request, exc: errors.DocChatError):
    print("DocChat Error: " + exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/", response_class=HTMLResponse)
async def index():
    return INDEX_HTML.read_text(encoding="utf-8")


@app.get("/health")
async def health():
    return {"status": "online", "identity": "DocChat", "model": config.GEMINI_MODEL}


@app.post("/sessions", response_model=SessionView)
async def create_session():
    return sessions.create().snapshot()


@app.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    return sessions.get(session_id).snapshot()


@app.post("/sessions/{session_id}/upload", response_model=SessionView)
async def upload(session_id: str, file: Optional[UploadFile] = File(None)):
    session = sessions.get(session_id)
    if file is None or not file.filename:
        raise errors.MissingInput("Please select a file.")
    contents = await file.read()
    await session.upload(file.filename, contents)
    return session.snapshot()


@app.post("/sessions/{session_id}/link", response_model=SessionView)
async def process_link(session_id: str, req: LinkReq):
    session = sessions.get(session_id)
    await session.submit_link(req.link)
    return session.snapshot()


@app.post("/sessions/{session_id}/ask", response_model=SessionView)
async def ask(session_id: str, req: AskReq):
    session = sessions.get(session_id)
    await session.ask(req.question)
    return session.snapshot()


@app.post("/sessions/{session_id}/reset", response_model=SessionView)
async def extract_another(session_id: str):
    session = sessions.get(session_id)
    session.reset()
    return session.snapshot()


@app.get("/sessions/{session_id}/transcript.docx")
async def transcript(session_id: str):
    session = sessions.get(session_id)
    return export.word(session.transcript, session.source)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
