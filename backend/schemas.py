# --- API Models ---
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel


class Speaker(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Mode(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    EXTRACTING = "extracting"
    READY = "ready"


class ChatTurn(BaseModel):
    speaker: Speaker
    text: str


class LinkReq(BaseModel):
    link: str = ""


class AskReq(BaseModel):
    question: str = ""


class SessionView(BaseModel):
    session_id: str
    mode: Mode
    view: str
    link_resolving: bool
    asking: bool
    source: Optional[str] = None
    segments: int = 0
    transcript: List[ChatTurn] = []
