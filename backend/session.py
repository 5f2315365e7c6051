#session.py - UI Controller
"""
All interaction state for one browser tab lives in a Session.

Transitions:

    awaiting_input --upload--> extracting --ok--> ready
                                          --fail--> awaiting_input
    awaiting_input --submit_link--> awaiting_input (+link_resolving)
                                          --ok--> ready
                                          --fail--> awaiting_input
    ready --ask--> ready (user turn appended now, assistant turn on reply)
    ready --reset--> awaiting_input (document and transcript cleared)

Blank questions are ignored in every mode. Anything else outside the
table raises errors.InvalidTransition.
"""
import time
import uuid
from typing import Dict

from fastapi.concurrency import run_in_threadpool

import config
import errors
import extract
import links
import model
from schemas import ChatTurn, Mode, SessionView, Speaker

VIEWS = {
    Mode.AWAITING_INPUT: "upload",
    Mode.EXTRACTING: "loading",
    Mode.READY: "chat",
}


class Session:
    def __init__(self, session_id):
        self.session_id = session_id
        self.mode = Mode.AWAITING_INPUT
        self.link_resolving = False
        self.asking = False
        self.source = None
        self.document = ()
        self.transcript = []

    @property
    def view(self):
        return VIEWS[self.mode]

    @property
    def busy(self):
        return self.mode == Mode.EXTRACTING or self.link_resolving or self.asking

    def _require_idle(self, action):
        if self.mode != Mode.AWAITING_INPUT or self.link_resolving:
            state = "resolving a link" if self.link_resolving else self.mode.value
            raise errors.InvalidTransition(action, state)

    def _require_ready(self, action):
        if self.mode != Mode.READY or self.asking:
            state = "waiting for an answer" if self.asking else self.mode.value
            raise errors.InvalidTransition(action, state)

    async def upload(self, filename, file_bytes):
        if not filename:
            raise errors.MissingInput("Please select a file.")
        self._require_idle("upload a file")
        kind = extract.DocumentKind.from_filename(filename)

        self.mode = Mode.EXTRACTING
        try:
            segments = await run_in_threadpool(extract.extract_segments, kind, file_bytes)
        except Exception:
            self.mode = Mode.AWAITING_INPUT
            raise

        self.document = tuple(segments)
        self.source = filename
        self.mode = Mode.READY

    async def submit_link(self, link):
        self._require_idle("process a link")

        self.link_resolving = True
        try:
            segments = await links.resolve_link(link)
        finally:
            self.link_resolving = False

        self.document = tuple(segments)
        self.source = link.strip()
        self.mode = Mode.READY

    async def ask(self, question):
        """Returns the assistant turn, or None when the question is blank."""
        if not question or not question.strip():
            return None
        self._require_ready("ask a question")

        prompt = model.build_prompt(question, self.transcript, self.document)
        self.transcript.append(ChatTurn(speaker=Speaker.USER, text=question))

        self.asking = True
        try:
            answer = await model.get_ai_response(prompt)
        finally:
            self.asking = False

        reply = ChatTurn(speaker=Speaker.ASSISTANT, text=answer)
        self.transcript.append(reply)
        return reply

    def reset(self):
        """Extract Another: forget the document and the chat."""
        self._require_ready("extract another document")
        self.document = ()
        self.source = None
        self.transcript = []
        self.mode = Mode.AWAITING_INPUT

    def snapshot(self):
        return SessionView(
            session_id=self.session_id,
            mode=self.mode,
            view=self.view,
            link_resolving=self.link_resolving,
            asking=self.asking,
            source=self.source,
            segments=len(self.document),
            transcript=list(self.transcript),
        )


class SessionStore:
    """
    In-memory registry; sessions die with the process. A session that has
    not been touched for config.SESSION_TTL seconds is dropped, unless an
    upload, link or question is still in flight for it.
    """

    def __init__(self, clock=time.monotonic):
        self._sessions: Dict[str, Session] = {}
        self._last_seen: Dict[str, float] = {}
        self._clock = clock

    def _evict_idle(self):
        cutoff = self._clock() - config.SESSION_TTL
        for session_id, seen in list(self._last_seen.items()):
            if seen < cutoff and not self._sessions[session_id].busy:
                del self._sessions[session_id]
                del self._last_seen[session_id]

    def create(self):
        self._evict_idle()
        session = Session(uuid.uuid4().hex)
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = self._clock()
        return session

    def get(self, session_id):
        self._evict_idle()
        session = self._sessions.get(session_id)
        if session is None:
            raise errors.SessionNotFound()
        self._last_seen[session_id] = self._clock()
        return session

    def __len__(self):
        return len(self._sessions)
