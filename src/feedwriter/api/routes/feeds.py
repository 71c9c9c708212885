"""Feed rendering API endpoints."""
import logging

from fastapi import APIRouter, Body, HTTPException, Response

from feedwriter.constants import RSS_MIME_TYPE
from feedwriter.exceptions import ErrorKind, FeedWriterError
from feedwriter.generator.rss_renderer import RSSRenderer
from feedwriter.generator.validation import find_problems
from feedwriter.model.document import FeedDocument
from feedwriter.utils.config import load_settings

router = APIRouter(prefix="/api/feeds", tags=["feeds"])

logger = logging.getLogger("feedwriter")


def _document_from(payload: dict) -> FeedDocument:
    try:
        return FeedDocument.from_dict(payload)
    except FeedWriterError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/render")
def render_feed(payload: dict = Body(...)):
    """Render a JSON feed document as RSS 2.0."""
    document = _document_from(payload)

    problems = find_problems(document)
    if problems:
        logger.warning(f"Rejected feed '{document.title}': {len(problems)} problem(s)")
        raise HTTPException(status_code=422, detail=problems)

    try:
        rendered = RSSRenderer(document, pretty=load_settings().pretty).render()
    except FeedWriterError as e:
        status = 422 if e.kind == ErrorKind.VALIDATION else 400
        raise HTTPException(status_code=status, detail=e.message)

    media_type = f"{RSS_MIME_TYPE}; charset={rendered.encoding}"
    return Response(content=rendered.to_xml_bytes(), media_type=media_type)


@router.post("/validate")
def validate_feed(payload: dict = Body(...)):
    """Report every problem that would stop a document from rendering."""
    document = _document_from(payload)
    problems = find_problems(document)
    return {"valid": not problems, "problems": problems}
