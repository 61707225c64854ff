"""Dashboard pages

GET / serves the page shell with a loading indicator; the page fetches
GET /dashboard/consultations once and swaps in the rendered cards.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from consultations.service import list_consultations
from database import get_db

from .formatting import format_timestamp

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["timestamp"] = format_timestamp

router = APIRouter(tags=["Dashboard"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request):
    return templates.TemplateResponse(request, "dashboard.html", {})


@router.get("/dashboard/consultations", response_class=HTMLResponse)
def consultation_cards(request: Request, db: Annotated[Session, Depends(get_db)]):
    """Consultation cards, newest first.

    A failed read is logged and rendered as an empty list.
    """
    try:
        consultations = list_consultations(db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching consultations: {e}", exc_info=True)
        consultations = []

    return templates.TemplateResponse(
        request,
        "_consultation_cards.html",
        {"consultations": consultations},
    )
