#config.py
import os
from dotenv import load_dotenv

load_dotenv()

# API Keys (server side only, never sent to the browser)
GEMINI_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

# Google Docs/Sheets links are always read through the document text export
GOOGLE_EXPORT_URL = "https://docs.google.com/document/d/{doc_id}/export?format=txt"
LINK_TIMEOUT = float(os.getenv("LINK_TIMEOUT", "30"))

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

# Sessions untouched for this many seconds are dropped from memory
SESSION_TTL = float(os.getenv("SESSION_TTL", "3600"))

# Shown as the assistant's answer whenever the model call fails
FALLBACK_ANSWER = "Error generating content."

APP_TITLE = "Find Your Answer With Me"
PORT = int(os.getenv("PORT", "5000"))
