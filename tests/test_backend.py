"""Tests for the backend data services."""

import json

import httpx
import pytest
import yaml

from folio.config import FolioSettings
from folio.models.domain import Locale, Theme
from folio.services.backend import SupabaseBackend, YamlBackend
from folio.services.errors import BackendError, PersistenceError, PortfolioNotFoundError


@pytest.mark.asyncio
async def test_yaml_fetch_public_portfolio(data_dir):
    """Test loading the aggregate payload from a YAML document."""
    backend = YamlBackend(data_dir)

    portfolio = await backend.fetch_public_portfolio("joao")

    assert portfolio.profile.id == "joao"
    assert portfolio.profile.full_name == "Joao Pereira"
    assert portfolio.profile.preferred_locale == Locale.EN
    assert portfolio.profile.education[0].start_year == "2015"
    assert portfolio.theme.primary_color == "#112233"
    assert portfolio.theme.font_family == "Inter, system-ui, sans-serif"
    assert [video.id for video in portfolio.featured_videos] == ["v1", "v2"]
    assert [project.id for project in portfolio.projects] == ["p1", "p2"]
    assert portfolio.experiences[0].period == "2021"
    assert len(portfolio.articles) == 2
    assert portfolio.cvs[0].language == Locale.ES
    assert portfolio.subscription.plan_tier == "pro"


@pytest.mark.asyncio
async def test_yaml_unknown_user(data_dir):
    backend = YamlBackend(data_dir)

    with pytest.raises(PortfolioNotFoundError) as exc_info:
        await backend.fetch_public_portfolio("nobody")
    assert exc_info.value.user_id == "nobody"


@pytest.mark.asyncio
async def test_yaml_rejects_path_like_user_ids(data_dir):
    backend = YamlBackend(data_dir)

    assert await backend.fetch_profile("../joao") is None
    assert await backend.fetch_projects("") == []


@pytest.mark.asyncio
async def test_yaml_invalid_document(data_dir):
    (data_dir / "portfolios" / "broken.yaml").write_text("profile: [unclosed", encoding="utf-8")
    backend = YamlBackend(data_dir)

    with pytest.raises(BackendError, match="Invalid YAML"):
        await backend.fetch_profile("broken")


@pytest.mark.asyncio
async def test_yaml_document_that_is_not_a_mapping(data_dir):
    (data_dir / "portfolios" / "listing.yaml").write_text("- one\n- two\n", encoding="utf-8")
    backend = YamlBackend(data_dir)

    with pytest.raises(BackendError, match="not a mapping"):
        await backend.fetch_public_portfolio("listing")


@pytest.mark.asyncio
async def test_yaml_row_without_id_is_backend_error(data_dir):
    document = {"profile": {"full_name": "Bad"}, "projects": [{"title": "No id"}]}
    with open(data_dir / "portfolios" / "bad.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(document, f)
    backend = YamlBackend(data_dir)

    with pytest.raises(BackendError, match="Malformed projects row"):
        await backend.fetch_public_portfolio("bad")


@pytest.mark.asyncio
async def test_yaml_collection_that_is_not_a_list(data_dir):
    document = {"profile": {"full_name": "Bad"}, "cvs": 42}
    with open(data_dir / "portfolios" / "bad.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(document, f)
    backend = YamlBackend(data_dir)

    with pytest.raises(BackendError, match="expected a list"):
        await backend.fetch_cvs("bad")


@pytest.mark.asyncio
async def test_yaml_upsert_theme_writes_document(data_dir):
    backend = YamlBackend(data_dir)

    saved = await backend.upsert_theme("joao", Theme(primary_color="#abcdef"))

    assert saved.primary_color == "#abcdef"
    assert saved.secondary_color == "#2d2550"
    with open(data_dir / "portfolios" / "joao.yaml", encoding="utf-8") as f:
        document = yaml.safe_load(f)
    assert document["theme"]["primary_color"] == "#abcdef"
    assert "user_id" not in document["theme"]
    assert (await backend.fetch_theme("joao")).primary_color == "#abcdef"


@pytest.mark.asyncio
async def test_yaml_update_preferred_locale(data_dir):
    backend = YamlBackend(data_dir)

    assert await backend.update_preferred_locale("joao", "es") == Locale.ES
    assert (await backend.fetch_profile("joao")).preferred_locale == Locale.ES


@pytest.mark.asyncio
async def test_yaml_writes_for_unknown_user_fail(data_dir):
    backend = YamlBackend(data_dir)

    with pytest.raises(PersistenceError):
        await backend.upsert_theme("nobody", Theme())
    with pytest.raises(PersistenceError):
        await backend.update_preferred_locale("nobody", Locale.EN)


def _supabase(handler):
    settings = FolioSettings(
        backend="supabase",
        supabase_url="https://project.supabase.co/",
        supabase_service_role_key="service-key",
    )
    return SupabaseBackend(settings, transport=httpx.MockTransport(handler))


def test_supabase_requires_credentials():
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        SupabaseBackend(FolioSettings(backend="supabase", supabase_url=None))


@pytest.mark.asyncio
async def test_supabase_select_request():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[{"id": "p1", "title": "Pipeline", "image_url": "https://img"}])

    backend = _supabase(handler)
    projects = await backend.fetch_projects("u1")

    assert projects[0].image == "https://img"
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/projects"
    assert request.url.params["user_id"] == "eq.u1"
    assert request.url.params["order"] == "created_at.desc"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["authorization"] == "Bearer service-key"


@pytest.mark.asyncio
async def test_supabase_missing_profile():
    backend = _supabase(lambda request: httpx.Response(200, json=[]))

    with pytest.raises(PortfolioNotFoundError):
        await backend.fetch_public_portfolio("u1")


@pytest.mark.asyncio
async def test_supabase_http_error_is_backend_error():
    backend = _supabase(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(BackendError):
        await backend.fetch_profile("u1")


@pytest.mark.asyncio
async def test_supabase_body_that_is_not_json():
    backend = _supabase(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(BackendError, match="not valid JSON"):
        await backend.fetch_projects("u1")


@pytest.mark.asyncio
async def test_supabase_invalid_row_is_backend_error():
    row = {"id": "p1", "title": "Pipeline", "position": "first"}
    backend = _supabase(lambda request: httpx.Response(200, json=[row]))

    with pytest.raises(BackendError, match="Malformed projects row"):
        await backend.fetch_projects("u1")


@pytest.mark.asyncio
async def test_supabase_upsert_theme():
    requests = []

    def handler(request):
        requests.append(request)
        body = json.loads(request.content)
        return httpx.Response(201, json=[body])

    backend = _supabase(handler)
    saved = await backend.upsert_theme("u1", Theme(primary_color="#010203"))

    assert saved.primary_color == "#010203"
    request = requests[0]
    assert request.method == "POST"
    assert request.url.params["on_conflict"] == "user_id"
    assert "merge-duplicates" in request.headers["prefer"]
    assert json.loads(request.content)["user_id"] == "u1"


@pytest.mark.asyncio
async def test_supabase_write_failure_is_persistence_error():
    backend = _supabase(lambda request: httpx.Response(403, json={"message": "denied"}))

    with pytest.raises(PersistenceError):
        await backend.upsert_theme("u1", Theme())
    with pytest.raises(PersistenceError):
        await backend.update_preferred_locale("u1", Locale.EN)


@pytest.mark.asyncio
async def test_supabase_update_locale():
    def handler(request):
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.u1"
        return httpx.Response(200, json=[{"preferred_locale": "en"}])

    backend = _supabase(handler)

    assert await backend.update_preferred_locale("u1", "en") == Locale.EN


@pytest.mark.asyncio
async def test_bundled_demo_portfolio():
    """Test that the demo document shipped with the package loads."""
    backend = YamlBackend()

    portfolio = await backend.fetch_public_portfolio("demo")

    assert portfolio.profile.full_name
    assert portfolio.profile.portfolio_template == "gradient"
    assert [video.position for video in portfolio.featured_videos] == [1, 2]
    assert portfolio.cvs[0].selected_projects == ["proj-1"]
