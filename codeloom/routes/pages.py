"""
Codeloom Backend - Page Routes
===============================

What:  Server-rendered HTML pages built from the ui components.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from codeloom.ui.pages import LandingPage, render_document

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, summary="Landing page")
async def landing_page() -> HTMLResponse:
    return HTMLResponse(content=str(render_document(LandingPage(), title="Codeloom")))
