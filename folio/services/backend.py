"""Backend data service clients: Supabase (PostgREST) and local YAML files."""

import asyncio
import re
from pathlib import Path
from typing import Any, Dict, List, Optional
import httpx
import yaml

from folio.config import FolioSettings, get_settings
from folio.logger import _log_debug, _log_error, _log_info
from folio.models.domain import (
    Article,
    CvRecord,
    Experience,
    FeaturedVideo,
    Locale,
    Profile,
    Project,
    PublicPortfolio,
    Subscription,
    Theme,
)
from folio.services.errors import BackendError, PersistenceError, PortfolioNotFoundError
from folio.services import normalizer

USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

PROFILE_COLUMNS = (
    "id, full_name, preferred_locale, title, bio, location, email, phone, photo_url, "
    "skills, education, social_links, show_cv_photo, translations, portfolio_template, cv_template"
)
THEME_COLUMNS = (
    "primary_color, secondary_color, accent_color, background_color, font_family, theme_mode, layout"
)
VIDEO_COLUMNS = "id, url, platform, title, description, tags, position"
PROJECT_COLUMNS = (
    "id, title, description, image_url, tags, link, category, company, position, translations"
)
EXPERIENCE_COLUMNS = (
    "id, title, company, period, description, location, current, position, translations"
)
ARTICLE_COLUMNS = (
    "id, title, summary, publication, publication_date, link, doi, authors, "
    "show_in_portfolio, show_in_cv, position, translations"
)
CV_COLUMNS = (
    "id, name, language, template, selected_projects, selected_experiences, "
    "selected_articles, show_cv_photo"
)
SUBSCRIPTION_COLUMNS = "status, plan_tier, trial_ends_at, current_period_end, grace_days"


def _map_row(mapper, row: Any, source: str):
    """Apply a row mapper; malformed rows surface as BackendError."""
    try:
        return mapper(row)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise BackendError(f"Malformed {source} row: {e}") from e


def _map_rows(mapper, rows: List[Any], source: str) -> list:
    return [_map_row(mapper, row, source) for row in rows]


class PortfolioBackend:
    """
    Read and write access to a user's portfolio data.

    Fetches return normalized domain models; the aggregate public payload is
    assembled from the individual fetches.
    """

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    async def fetch_theme(self, user_id: str) -> Optional[Theme]:
        raise NotImplementedError

    async def fetch_featured_videos(self, user_id: str) -> List[FeaturedVideo]:
        raise NotImplementedError

    async def fetch_projects(self, user_id: str) -> List[Project]:
        raise NotImplementedError

    async def fetch_experiences(self, user_id: str) -> List[Experience]:
        raise NotImplementedError

    async def fetch_articles(self, user_id: str) -> List[Article]:
        raise NotImplementedError

    async def fetch_cvs(self, user_id: str) -> List[CvRecord]:
        raise NotImplementedError

    async def fetch_subscription(self, user_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    async def upsert_theme(self, user_id: str, theme: Theme) -> Theme:
        raise NotImplementedError

    async def update_preferred_locale(self, user_id: str, locale: Locale) -> Locale:
        raise NotImplementedError

    async def fetch_public_portfolio(self, user_id: str) -> PublicPortfolio:
        """
        Fetch the aggregate payload of a published portfolio.

        Args:
            user_id: Public user identifier

        Returns:
            PublicPortfolio: Profile, theme and every collection

        Raises:
            PortfolioNotFoundError: If the user has no profile
            BackendError: If any fetch fails
        """
        profile = await self.fetch_profile(user_id)
        if profile is None:
            raise PortfolioNotFoundError(user_id)

        theme, videos, projects, experiences, articles, cvs, subscription = await asyncio.gather(
            self.fetch_theme(user_id),
            self.fetch_featured_videos(user_id),
            self.fetch_projects(user_id),
            self.fetch_experiences(user_id),
            self.fetch_articles(user_id),
            self.fetch_cvs(user_id),
            self.fetch_subscription(user_id),
        )
        return PublicPortfolio(
            profile=profile,
            theme=theme,
            featured_videos=videos,
            projects=projects,
            experiences=experiences,
            articles=articles,
            cvs=cvs,
            subscription=subscription,
        )


class SupabaseBackend(PortfolioBackend):
    """Backend client talking to Supabase through its PostgREST API."""

    def __init__(
        self,
        settings: Optional[FolioSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Supabase client.

        Args:
            settings: Folio settings (uses defaults if None)
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If the Supabase URL or key is not configured
        """
        self.settings = settings or get_settings()
        if not self.settings.supabase_url or not self.settings.supabase_service_role_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be configured")
        self.base_url = self.settings.supabase_url.rstrip("/")
        self.api_key = self.settings.supabase_service_role_key
        self.timeout = self.settings.backend_timeout
        self.transport = transport

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Dict[str, str],
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/rest/v1/{table}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(
                    method, url, params=params, json=json, headers=self._headers(prefer)
                )
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise BackendError(f"Backend request to '{table}' timed out after {self.timeout}s") from e
            except httpx.HTTPError as e:
                raise BackendError(f"Backend request to '{table}' failed: {str(e)}") from e
        if not response.content:
            return []
        try:
            rows = response.json()
        except ValueError as e:
            raise BackendError(f"Backend response from '{table}' is not valid JSON") from e
        return rows if isinstance(rows, list) else [rows]

    async def _select(
        self, table: str, columns: str, key: str, user_id: str, order: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        params = {"select": columns, key: f"eq.{user_id}"}
        if order:
            params["order"] = order
        return await self._request("GET", table, params)

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        rows = await self._select("profiles", PROFILE_COLUMNS, "id", user_id)
        return _map_row(normalizer.profile_from_row, rows[0], "profiles") if rows else None

    async def fetch_theme(self, user_id: str) -> Optional[Theme]:
        rows = await self._select("user_themes", THEME_COLUMNS, "user_id", user_id)
        return _map_row(normalizer.theme_from_row, rows[0], "user_themes") if rows else None

    async def fetch_featured_videos(self, user_id: str) -> List[FeaturedVideo]:
        rows = await self._select(
            "featured_videos", VIDEO_COLUMNS, "user_id", user_id, order="position.asc"
        )
        return _map_rows(normalizer.video_from_row, rows, "featured_videos")

    async def fetch_projects(self, user_id: str) -> List[Project]:
        rows = await self._select(
            "projects", PROJECT_COLUMNS, "user_id", user_id, order="created_at.desc"
        )
        return _map_rows(normalizer.project_from_row, rows, "projects")

    async def fetch_experiences(self, user_id: str) -> List[Experience]:
        rows = await self._select(
            "experiences", EXPERIENCE_COLUMNS, "user_id", user_id, order="created_at.desc"
        )
        return _map_rows(normalizer.experience_from_row, rows, "experiences")

    async def fetch_articles(self, user_id: str) -> List[Article]:
        rows = await self._select(
            "scientific_articles", ARTICLE_COLUMNS, "user_id", user_id, order="position.asc"
        )
        return _map_rows(normalizer.article_from_row, rows, "scientific_articles")

    async def fetch_cvs(self, user_id: str) -> List[CvRecord]:
        rows = await self._select("cvs", CV_COLUMNS, "user_id", user_id, order="updated_at.desc")
        return _map_rows(normalizer.cv_from_row, rows, "cvs")

    async def fetch_subscription(self, user_id: str) -> Optional[Subscription]:
        rows = await self._select("subscriptions", SUBSCRIPTION_COLUMNS, "user_id", user_id)
        return _map_row(normalizer.subscription_from_row, rows[0], "subscriptions") if rows else None

    async def upsert_theme(self, user_id: str, theme: Theme) -> Theme:
        """
        Create or replace the user's theme.

        Raises:
            PersistenceError: If the backend rejects the write
        """
        try:
            rows = await self._request(
                "POST",
                "user_themes",
                {"on_conflict": "user_id", "select": THEME_COLUMNS},
                json=normalizer.theme_to_row(user_id, theme),
                prefer="resolution=merge-duplicates,return=representation",
            )
        except BackendError as e:
            _log_error(f"Theme upsert failed for {user_id}: {e}")
            raise PersistenceError(str(e)) from e
        if not rows:
            raise PersistenceError("Theme upsert returned no row")
        try:
            return _map_row(normalizer.theme_from_row, rows[0], "user_themes")
        except BackendError as e:
            raise PersistenceError(str(e)) from e

    async def update_preferred_locale(self, user_id: str, locale: Locale) -> Locale:
        """
        Store the user's preferred locale.

        Raises:
            PersistenceError: If the backend rejects the write or the profile does not exist
        """
        locale = Locale(locale)
        try:
            rows = await self._request(
                "PATCH",
                "profiles",
                {"id": f"eq.{user_id}", "select": "preferred_locale"},
                json={"preferred_locale": locale.value},
                prefer="return=representation",
            )
        except BackendError as e:
            _log_error(f"Locale update failed for {user_id}: {e}")
            raise PersistenceError(str(e)) from e
        if not rows:
            raise PersistenceError(f"Profile not found: {user_id}")
        try:
            return _map_row(
                lambda row: Locale(row.get("preferred_locale") or locale.value), rows[0], "profiles"
            )
        except BackendError as e:
            raise PersistenceError(str(e)) from e


class YamlBackend(PortfolioBackend):
    """
    Backend reading one YAML document per user.

    Documents live at {data_dir}/portfolios/{user_id}.yaml and hold the same
    snake_case rows the Supabase tables return.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the YAML backend.

        Args:
            data_dir: Directory containing the portfolios/ folder. Defaults to the configured data_dir
        """
        if data_dir is None:
            data_dir = get_settings().data_dir
        self.data_dir = Path(data_dir)

    def _path(self, user_id: str) -> Optional[Path]:
        if not user_id or not USER_ID_PATTERN.match(user_id):
            return None
        return self.data_dir / "portfolios" / f"{user_id}.yaml"

    def _load(self, user_id: str) -> Optional[Dict[str, Any]]:
        path = self._path(user_id)
        if path is None or not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BackendError(f"Invalid YAML format in {path}: {e}") from e
        except OSError as e:
            raise BackendError(f"Error reading file {path}: {e}") from e
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise BackendError(f"Portfolio document {path} is not a mapping")
        return document

    def _save(self, user_id: str, document: Dict[str, Any]) -> None:
        path = self._path(user_id)
        try:
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(document, f, allow_unicode=True, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Error writing file {path}: {e}") from e
        _log_debug(f"Saved {path}")

    def _rows(self, user_id: str, key: str) -> List[Dict[str, Any]]:
        document = self._load(user_id) or {}
        rows = document.get(key) or []
        if not isinstance(rows, list):
            raise BackendError(f"Malformed {key} in portfolio of {user_id}: expected a list")
        return rows

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        document = self._load(user_id)
        if document is None or not isinstance(document.get("profile"), dict):
            return None
        row = {"id": user_id, **document["profile"]}
        return _map_row(normalizer.profile_from_row, row, "profile")

    async def fetch_theme(self, user_id: str) -> Optional[Theme]:
        document = self._load(user_id) or {}
        return _map_row(normalizer.theme_from_row, document.get("theme"), "theme")

    async def fetch_featured_videos(self, user_id: str) -> List[FeaturedVideo]:
        videos = _map_rows(
            normalizer.video_from_row, self._rows(user_id, "featured_videos"), "featured_videos"
        )
        return sorted(videos, key=lambda video: (video.position is None, video.position or 0))

    async def fetch_projects(self, user_id: str) -> List[Project]:
        return _map_rows(normalizer.project_from_row, self._rows(user_id, "projects"), "projects")

    async def fetch_experiences(self, user_id: str) -> List[Experience]:
        return _map_rows(
            normalizer.experience_from_row, self._rows(user_id, "experiences"), "experiences"
        )

    async def fetch_articles(self, user_id: str) -> List[Article]:
        return _map_rows(normalizer.article_from_row, self._rows(user_id, "articles"), "articles")

    async def fetch_cvs(self, user_id: str) -> List[CvRecord]:
        return _map_rows(normalizer.cv_from_row, self._rows(user_id, "cvs"), "cvs")

    async def fetch_subscription(self, user_id: str) -> Optional[Subscription]:
        document = self._load(user_id) or {}
        return _map_row(normalizer.subscription_from_row, document.get("subscription"), "subscription")

    def _load_for_write(self, user_id: str) -> Dict[str, Any]:
        try:
            document = self._load(user_id)
        except BackendError as e:
            raise PersistenceError(str(e)) from e
        if document is None:
            raise PersistenceError(f"Profile not found: {user_id}")
        return document

    async def upsert_theme(self, user_id: str, theme: Theme) -> Theme:
        document = self._load_for_write(user_id)
        row = normalizer.theme_to_row(user_id, theme)
        row.pop("user_id")
        document["theme"] = row
        self._save(user_id, document)
        return normalizer.theme_from_row(row)

    async def update_preferred_locale(self, user_id: str, locale: Locale) -> Locale:
        locale = Locale(locale)
        document = self._load_for_write(user_id)
        profile = document.get("profile")
        if not isinstance(profile, dict):
            raise PersistenceError(f"Profile not found: {user_id}")
        profile["preferred_locale"] = locale.value
        self._save(user_id, document)
        return locale


# Singleton instance
_backend: Optional[PortfolioBackend] = None


def get_backend(settings: Optional[FolioSettings] = None) -> PortfolioBackend:
    """
    Get or create the backend singleton selected by the settings.

    Args:
        settings: Optional settings; defaults to the process settings

    Returns:
        PortfolioBackend: The backend instance

    Raises:
        ValueError: If the configured backend is unknown
    """
    global _backend
    if _backend is None:
        settings = settings or get_settings()
        if settings.backend == "supabase":
            _backend = SupabaseBackend(settings)
        elif settings.backend == "yaml":
            _backend = YamlBackend(settings.data_dir)
        else:
            raise ValueError(f"Unsupported backend: {settings.backend}. Supported: 'yaml', 'supabase'")
        _log_info(f"Using {settings.backend} backend")
    return _backend
