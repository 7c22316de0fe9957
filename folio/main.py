"""FastAPI application for Folio."""

from io import BytesIO
from typing import Optional
from fastapi import FastAPI, HTTPException, Query, status
from fastapi.responses import HTMLResponse, StreamingResponse

from folio.config import get_settings
from folio.logger import _log_error, _log_info, setup_logger
from folio.models.domain import Locale, PublicPortfolio, Theme
from folio.models.request_models import (
    CvGenerateRequest,
    CvRenderRequest,
    LocaleUpdateRequest,
    PortfolioRenderRequest,
    ThemeUpdateRequest,
)
from folio.models.response_models import (
    AccessResponse,
    ErrorResponse,
    HealthResponse,
    LocaleResponse,
    RootResponse,
)
from folio.rendering.labels import PLACEHOLDERS, message_for
from folio.rendering.renderer import get_renderer
from folio.services import normalizer
from folio.services.access import AccessState, classify_access
from folio.services.backend import get_backend
from folio.services.errors import BackendError, PersistenceError, PortfolioNotFoundError
from folio.services.pdf_generator import PDFGenerator

settings = get_settings()
setup_logger(settings.log_level, settings.log_file)

app = FastAPI(
    title="Folio API",
    description="""API para publicar portfólios e gerar currículos a partir dos dados do usuário.

## Características

* **Portfólio público**: Página pública em `/p/{user_id}` com o template escolhido
* **Currículos**: Oito layouts de CV com pré-visualização em HTML e exportação em PDF
* **Temas**: Paleta e fonte do portfólio salvas por usuário
* **Multi-idioma**: Português, inglês e espanhol
* **Assinatura**: Estado de acesso (ativo, teste, carência, bloqueado)

## Uso

1. Use `/api/v1/public-portfolio/{user_id}` para obter os dados publicados
2. Use `/api/v1/cv/render` e `/api/v1/portfolio/render` para pré-visualizar layouts
3. Use `/api/v1/cv/generate` para exportar um CV salvo em PDF""",
    version="1.0.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    servers=[
        {
            "url": "http://localhost:8000",
            "description": "Local development server"
        }
    ],
    tags_metadata=[
        {
            "name": "health",
            "description": "Health check and status endpoints"
        },
        {
            "name": "portfolio",
            "description": "Public portfolio data and pages"
        },
        {
            "name": "cv",
            "description": "CV preview and PDF export"
        },
        {
            "name": "users",
            "description": "Subscription access and saved preferences"
        }
    ]
)

# Initialize services
backend = get_backend(settings)
renderer = get_renderer()
pdf_generator = PDFGenerator()


def _default_locale() -> Locale:
    try:
        return Locale(settings.default_locale)
    except ValueError:
        return Locale.PT


def _pick_locale(*candidates) -> Locale:
    """First valid locale among the candidates, else the configured default."""
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return Locale(candidate)
        except ValueError:
            continue
    return _default_locale()


@app.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
    tags=["health"],
    responses={
        200: {
            "description": "API information",
            "content": {
                "application/json": {
                    "example": {
                        "message": "Folio API",
                        "version": "1.0.0"
                    }
                }
            }
        }
    }
)
async def root():
    """
    Root endpoint.

    Returns basic API information including name and version.
    """
    return RootResponse(message="Folio API", version="1.0.0")


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running and healthy",
    tags=["health"],
)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/api/v1/public-portfolio/{user_id}",
    response_model=PublicPortfolio,
    status_code=status.HTTP_200_OK,
    summary="Get public portfolio data",
    description="""
    Returns the published data of a user: profile, theme, featured videos,
    projects, experiences, articles, CVs and subscription.
    """,
    tags=["portfolio"],
    responses={
        404: {
            "description": "Not found - The user has no published profile",
            "model": ErrorResponse
        },
        502: {
            "description": "Backend data service unavailable",
            "model": ErrorResponse
        },
        500: {
            "description": "Internal server error",
            "model": ErrorResponse
        }
    }
)
async def get_public_portfolio(user_id: str):
    """
    Get the aggregate public portfolio payload.

    **Parameters:**
    - `user_id`: Owner of the portfolio
    """
    try:
        return await backend.fetch_public_portfolio(user_id)
    except PortfolioNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        _log_error(f"Error loading portfolio {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error loading portfolio: {str(e)}")


@app.get(
    "/p/{user_id}",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="Public portfolio page",
    description="""
    Renders the public portfolio of a user as a complete HTML page.

    The locale comes from `lang`, then the owner's preferred locale. The
    template comes from `template`, then the owner's stored choice. Portfolios
    with a blocked subscription show a localized notice instead.
    """,
    tags=["portfolio"],
    responses={
        200: {"description": "Portfolio page", "content": {"text/html": {}}},
        403: {"description": "Subscription blocked", "content": {"text/html": {}}},
        404: {"description": "Portfolio not found", "content": {"text/html": {}}},
        502: {"description": "Backend data service unavailable", "content": {"text/html": {}}}
    }
)
async def public_portfolio_page(
    user_id: str,
    lang: Optional[str] = Query(None, description="Locale override (pt, en or es)"),
    template: Optional[str] = Query(None, description="Template override"),
):
    """Render the public portfolio page."""
    try:
        portfolio = await backend.fetch_public_portfolio(user_id)
    except PortfolioNotFoundError:
        locale = _pick_locale(lang)
        page = renderer.render_message_page(
            message_for(locale, "not_found"), message_for(locale, "not_found"), locale
        )
        return HTMLResponse(page, status_code=404)
    except BackendError as e:
        _log_error(f"Error loading portfolio {user_id}: {e}")
        locale = _pick_locale(lang)
        page = renderer.render_message_page(
            message_for(locale, "load_failed"), message_for(locale, "load_failed"), locale
        )
        return HTMLResponse(page, status_code=502)

    profile = portfolio.profile
    locale = _pick_locale(lang, profile.preferred_locale)
    access = classify_access(
        portfolio.subscription, default_grace_days=settings.default_grace_days
    )
    if access == AccessState.BLOCKED:
        _log_info(f"Public portfolio {user_id} is blocked")
        page = renderer.render_message_page(
            message_for(locale, "blocked_title"),
            message_for(locale, "blocked_subtitle"),
            locale,
            portfolio.theme,
        )
        return HTMLResponse(page, status_code=403)

    props = normalizer.build_portfolio_props(
        profile,
        portfolio.experiences,
        portfolio.projects,
        portfolio.featured_videos,
        portfolio.articles,
        locale,
        portfolio.theme,
    )
    body = renderer.render_portfolio(template or profile.portfolio_template, props)
    title = profile.full_name.strip() or PLACEHOLDERS[locale]["name"]
    return HTMLResponse(renderer.render_page(body, title, locale, portfolio.theme))


@app.post(
    "/api/v1/cv/render",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="Render CV preview",
    description="Renders normalized CV data with the selected template as HTML.",
    tags=["cv"],
    responses={
        200: {"description": "CV HTML", "content": {"text/html": {}}},
        400: {"description": "Bad request - Invalid input parameters", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def render_cv(request: CvRenderRequest):
    """
    Render a CV preview.

    **Example:**
    ```json
    {
      "template": "corporate",
      "props": {"profile": {"fullName": "Ana Silva"}, "locale": "en"}
    }
    ```
    """
    try:
        props = request.props
        body = renderer.render_cv(request.template, props)
        if request.full_page:
            title = props.profile.full_name.strip() or PLACEHOLDERS[props.locale]["name"]
            body = renderer.render_page(body, title, props.locale, props.theme)
        return HTMLResponse(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        _log_error(f"Error rendering CV: {e}")
        raise HTTPException(status_code=500, detail=f"Error rendering CV: {str(e)}")


@app.post(
    "/api/v1/portfolio/render",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="Render portfolio preview",
    description="Renders normalized portfolio data with the selected template as HTML.",
    tags=["portfolio"],
    responses={
        200: {"description": "Portfolio HTML", "content": {"text/html": {}}},
        400: {"description": "Bad request - Invalid input parameters", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def render_portfolio(request: PortfolioRenderRequest):
    """Render a portfolio preview."""
    try:
        props = request.props
        body = renderer.render_portfolio(request.template, props)
        if request.full_page:
            title = props.profile.full_name.strip() or PLACEHOLDERS[props.locale]["name"]
            body = renderer.render_page(body, title, props.locale, props.theme)
        return HTMLResponse(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        _log_error(f"Error rendering portfolio: {e}")
        raise HTTPException(status_code=500, detail=f"Error rendering portfolio: {str(e)}")


@app.post(
    "/api/v1/cv/generate",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate CV PDF",
    description="""
    Generates the PDF of a stored CV.

    The CV's selection of projects, experiences and articles, its language and
    its template are applied; `locale` and `template` override them.
    """,
    tags=["cv"],
    responses={
        200: {
            "description": "CV PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        400: {"description": "Bad request - Invalid input parameters", "model": ErrorResponse},
        404: {"description": "Not found - Unknown user or CV", "model": ErrorResponse},
        502: {"description": "Backend data service unavailable", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def generate_cv(request: CvGenerateRequest):
    """
    Generate a CV PDF.

    **Returns:**
    - PDF file as binary stream with filename `CV_{name}_{locale}.pdf`
    """
    try:
        portfolio = await backend.fetch_public_portfolio(request.user_id)
    except PortfolioNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))

    cv = None
    if request.cv_id:
        cv = next((item for item in portfolio.cvs if item.id == request.cv_id), None)
        if cv is None:
            raise HTTPException(status_code=404, detail=f"CV not found: {request.cv_id}")

    profile = portfolio.profile
    locale = _pick_locale(request.locale, cv.language if cv else None, profile.preferred_locale)
    template_id = request.template or (cv.template if cv else None) or profile.cv_template

    try:
        props = normalizer.build_cv_props(
            profile,
            portfolio.experiences,
            portfolio.projects,
            portfolio.articles,
            locale,
            portfolio.theme,
            cv,
        )
        title = profile.full_name.strip() or PLACEHOLDERS[locale]["name"]
        html = renderer.render_page(
            renderer.render_cv(template_id, props), title, locale, portfolio.theme
        )
        pdf_bytes = pdf_generator.generate_pdf(html)

        name = (profile.slug or profile.id or request.user_id).replace(" ", "_")
        filename = f"CV_{name}_{locale.value}.pdf"
        _log_info(f"Generated {filename}")

        return StreamingResponse(
            BytesIO(pdf_bytes),
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"'
            }
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        _log_error(f"Error generating CV for {request.user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error generating CV: {str(e)}")


@app.get(
    "/api/v1/users/{user_id}/access",
    response_model=AccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Get access state",
    description="Classifies the user's subscription as active, trial, grace or blocked.",
    tags=["users"],
    responses={
        404: {"description": "Not found - Unknown user", "model": ErrorResponse},
        502: {"description": "Backend data service unavailable", "model": ErrorResponse}
    }
)
async def get_access(user_id: str):
    """Get the access state of a user."""
    try:
        profile = await backend.fetch_profile(user_id)
        if profile is None:
            raise PortfolioNotFoundError(user_id)
        subscription = await backend.fetch_subscription(user_id)
    except PortfolioNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))

    state = classify_access(subscription, default_grace_days=settings.default_grace_days)
    return AccessResponse(
        user_id=user_id,
        state=state,
        plan_tier=subscription.plan_tier if subscription else None,
    )


@app.put(
    "/api/v1/users/{user_id}/theme",
    response_model=Theme,
    status_code=status.HTTP_200_OK,
    summary="Save portfolio theme",
    description="Creates or replaces the user's theme. Missing fields take the default values.",
    tags=["users"],
    responses={
        502: {"description": "The theme could not be saved", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def update_theme(user_id: str, request: ThemeUpdateRequest):
    """Save the portfolio theme of a user."""
    try:
        return await backend.upsert_theme(user_id, Theme(**request.model_dump()))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        _log_error(f"Error saving theme for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error saving theme: {str(e)}")


@app.put(
    "/api/v1/users/{user_id}/locale",
    response_model=LocaleResponse,
    status_code=status.HTTP_200_OK,
    summary="Save preferred locale",
    description="Stores the user's preferred locale (pt, en or es).",
    tags=["users"],
    responses={
        502: {"description": "The locale could not be saved", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def update_locale(user_id: str, request: LocaleUpdateRequest):
    """Save the preferred locale of a user."""
    try:
        locale = await backend.update_preferred_locale(user_id, request.locale)
        return LocaleResponse(locale=locale)
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        _log_error(f"Error saving locale for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error saving locale: {str(e)}")

