#model.py
import google.generativeai as genai

import config
import errors
from schemas import Speaker

# Initialize Client
if config.GEMINI_KEY:
    genai.configure(api_key=config.GEMINI_KEY)


def build_prompt(question, conversation=(), sources=()):
    """
    Linearizes the chat so far, the extracted document text and the new
    question into one completion prompt ending in "Assistant:".
    """
    prompt = ""
    for turn in conversation:
        if turn.speaker == Speaker.USER:
            prompt += f"User: {turn.text}\n"
        else:
            prompt += f"Assistant: {turn.text}\n"

    if sources:
        prompt += f"Relevant Documents/Links: {', '.join(sources)}\n"

    prompt += f"User: {question}\nAssistant:"
    return prompt


def _response_text(response):
    if not response.candidates or not response.candidates[0].content.parts:
        return ""
    return response.text or ""


async def get_ai_response(prompt):
    """
    Sends the prompt to Gemini. Never raises: any failure comes back as
    config.FALLBACK_ANSWER so it shows up inline in the chat.
    """
    try:
        if not config.GEMINI_KEY:
            raise errors.ModelError("GEMINI_API_KEY is not set")
        gemini = genai.GenerativeModel(config.GEMINI_MODEL)
        response = await gemini.generate_content_async(prompt)
        return _response_text(response)
    except Exception as e:
        print("Gemini Error: " + str(e))
        return config.FALLBACK_ANSWER
