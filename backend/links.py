#links.py - Google Docs/Sheets link resolver
import asyncio
import re

import aiohttp

import config
import errors

# Only the real docs.google.com host matches; lookalike hosts are invalid links
DOC_ID_PATTERN = re.compile(r"docs\.google\.com/(?:document|spreadsheets)/d/([^/]+)")


def extract_doc_id(link):
    match = DOC_ID_PATTERN.search(link or "")
    return match.group(1) if match else None


async def fetch_doc_text(doc_id):
    """
    Downloads the plain-text export of a Google document.
    Sheets links land here too and go through the same document export URL.
    """
    url = config.GOOGLE_EXPORT_URL.format(doc_id=doc_id)
    timeout = aiohttp.ClientTimeout(total=config.LINK_TIMEOUT)

    async with aiohttp.ClientSession(timeout=timeout) as session:
        try:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise errors.LinkFetchError()
                if not resp.content_type.startswith("text/"):
                    raise errors.LinkFetchError()
                return await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            print("Link Error: " + str(e))
            raise errors.LinkFetchError() from e


async def resolve_link(link):
    """Returns the linked document as a single segment."""
    if not link:
        raise errors.MissingInput("Please enter a Google Docs or Sheets link.")

    doc_id = extract_doc_id(link)
    if not doc_id:
        raise errors.InvalidLink()

    text = await fetch_doc_text(doc_id)
    return [text]
