"""Application shell: view-state machine and data loading orchestration."""

import re
from enum import Enum
from typing import List, NamedTuple, Optional
from urllib.parse import parse_qs, urlparse
from pydantic import BaseModel

from folio.logger import _log_debug, _log_info, _log_warning
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
from folio.rendering.labels import message_for
from folio.rendering.palette import DEFAULT_THEME
from folio.services.access import AccessState, classify_access
from folio.services.backend import PortfolioBackend
from folio.services.errors import (
    BackendError,
    InvalidTransitionError,
    PersistenceError,
    PortfolioNotFoundError,
)

PUBLIC_PATH_PATTERN = re.compile(r"^/p/([a-zA-Z0-9-]+)")


class ViewState(str, Enum):
    LANDING = "landing"
    AUTH = "auth"
    DASHBOARD = "dashboard"
    PUBLIC = "public"


# Transitions allowed without a sign-in; PUBLIC and LANDING are reachable from anywhere
ALLOWED_TRANSITIONS = {
    ViewState.LANDING: {ViewState.AUTH},
    ViewState.AUTH: {ViewState.LANDING},
    ViewState.DASHBOARD: set(),
    ViewState.PUBLIC: set(),
}


class ViewSnapshot(BaseModel):
    """Everything the shell displays for one identity, replaced as a whole."""

    user_id: Optional[str] = None
    profile: Optional[Profile] = None
    theme: Optional[Theme] = None
    featured_videos: List[FeaturedVideo] = []
    projects: List[Project] = []
    experiences: List[Experience] = []
    articles: List[Article] = []
    cvs: List[CvRecord] = []
    subscription: Optional[Subscription] = None
    message: Optional[str] = None
    loading: bool = False

    class Config:
        frozen = True

    @classmethod
    def from_portfolio(cls, user_id: str, portfolio: PublicPortfolio) -> "ViewSnapshot":
        return cls(
            user_id=user_id,
            profile=portfolio.profile,
            theme=portfolio.theme,
            featured_videos=portfolio.featured_videos,
            projects=portfolio.projects,
            experiences=portfolio.experiences,
            articles=portfolio.articles,
            cvs=portfolio.cvs,
            subscription=portfolio.subscription,
        )


EMPTY_SNAPSHOT = ViewSnapshot()


class Route(NamedTuple):
    view: ViewState
    user_id: Optional[str] = None
    locale: Optional[Locale] = None


def route_from_url(url: str) -> Route:
    """
    Derive the initial view from a URL.

    /p/<id> opens that user's public portfolio; ?view=public opens the
    signed-in user's own public view; ?lang= selects the locale. Anything
    else lands on the landing page.

    Args:
        url: Absolute URL or path with optional query string

    Returns:
        Route: Target view, public user id and requested locale
    """
    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    lang = (params.get("lang") or [None])[0]
    try:
        locale = Locale(lang) if lang else None
    except ValueError:
        locale = None

    match = PUBLIC_PATH_PATTERN.match(parsed.path or "")
    if match:
        return Route(ViewState.PUBLIC, match.group(1), locale)
    if (params.get("view") or [None])[0] == "public":
        return Route(ViewState.PUBLIC, None, locale)
    return Route(ViewState.LANDING, None, locale)


class AppShell:
    """
    Top-level view-state holder.

    Loads run as transition actions. Each identity transition resets the
    snapshot and bumps a generation counter; a load that resolves under an
    older generation is discarded.
    """

    def __init__(self, backend: PortfolioBackend, locale: Locale = Locale.PT):
        self.backend = backend
        self.locale = Locale(locale)
        self.state = ViewState.LANDING
        self.snapshot = EMPTY_SNAPSHOT
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def theme(self) -> Theme:
        """Theme in effect: the loaded user theme, else the application default."""
        return self.snapshot.theme or DEFAULT_THEME

    def _transition(self, target: ViewState, signed_in: bool = False) -> None:
        allowed = (
            target in (ViewState.LANDING, ViewState.PUBLIC)
            or target in ALLOWED_TRANSITIONS[self.state]
            or (target == ViewState.DASHBOARD and self.state == ViewState.AUTH and signed_in)
        )
        if not allowed:
            raise InvalidTransitionError(self.state, target)
        _log_debug(f"View {self.state.value} -> {target.value}")
        self.state = target

    def reset(self) -> None:
        """Drop every loaded entity and invalidate in-flight loads."""
        self._generation += 1
        self.snapshot = EMPTY_SNAPSHOT

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            _log_debug(f"Discarding stale load (generation {generation}, current {self._generation})")
            return False
        return True

    def _fail(self, key: str) -> None:
        self.snapshot = ViewSnapshot(message=message_for(self.locale, key))
        self.state = ViewState.LANDING

    def _navigate(self, target: ViewState) -> None:
        self._transition(target)
        # A load still in flight belongs to the view just left
        if self.snapshot.loading:
            self.reset()

    def go_to_auth(self) -> None:
        self._navigate(ViewState.AUTH)

    def go_to_landing(self) -> None:
        self._navigate(ViewState.LANDING)

    async def sign_in(self, user_id: str) -> bool:
        """
        Load the signed-in user's data and enter the dashboard.

        Args:
            user_id: Authenticated user identifier

        Returns:
            bool: True if the result was applied, False if it went stale

        Raises:
            InvalidTransitionError: If the shell is not on the auth view
        """
        if self.state != ViewState.AUTH:
            raise InvalidTransitionError(self.state, ViewState.DASHBOARD)
        return await self._load(user_id, ViewState.DASHBOARD, "sync_failed")

    async def open_public(self, user_id: Optional[str] = None) -> bool:
        """
        Show a published portfolio.

        Args:
            user_id: Owner of the portfolio; defaults to the signed-in user

        Returns:
            bool: True if the result was applied, False if it went stale
        """
        user_id = user_id or self.snapshot.user_id
        if not user_id:
            self.reset()
            self._fail("not_found")
            return True
        return await self._load(user_id, ViewState.PUBLIC, "load_failed")

    async def _load(self, user_id: str, target: ViewState, failure_key: str) -> bool:
        self.reset()
        generation = self._generation
        self.snapshot = ViewSnapshot(user_id=user_id, loading=True)
        _log_info(f"Loading portfolio of {user_id} for the {target.value} view")

        try:
            portfolio = await self.backend.fetch_public_portfolio(user_id)
        except PortfolioNotFoundError:
            if self._is_current(generation):
                _log_warning(f"Portfolio not found: {user_id}")
                self._fail("not_found")
            return self._generation == generation
        except BackendError as e:
            if self._is_current(generation):
                _log_warning(f"Failed to load portfolio of {user_id}: {e}")
                self._fail(failure_key)
            return self._generation == generation

        if not self._is_current(generation):
            return False

        self.snapshot = ViewSnapshot.from_portfolio(user_id, portfolio)
        if portfolio.profile.preferred_locale is not None:
            self.locale = portfolio.profile.preferred_locale
        self._transition(target, signed_in=True)
        return True

    def sign_out(self) -> None:
        self.reset()
        self._transition(ViewState.LANDING)

    def access_state(self, now=None) -> AccessState:
        return classify_access(self.snapshot.subscription, now)

    def _require_user(self) -> str:
        # Preferences belong to the signed-in user, not to a portfolio being viewed
        if self.state != ViewState.DASHBOARD or not self.snapshot.user_id:
            raise ValueError("No signed-in user")
        return self.snapshot.user_id

    async def change_theme(self, theme: Theme) -> Theme:
        """
        Persist a new theme for the current user.

        On failure the previous theme stays in place, the localized message is
        set and the error is re-raised.

        Raises:
            PersistenceError: If the backend rejects the write
        """
        user_id = self._require_user()
        generation = self._generation
        try:
            saved = await self.backend.upsert_theme(user_id, theme)
        except PersistenceError:
            if self._generation == generation:
                self.snapshot = self.snapshot.model_copy(
                    update={"message": message_for(self.locale, "theme_failed")}
                )
            raise
        if self._is_current(generation):
            self.snapshot = self.snapshot.model_copy(update={"theme": saved, "message": None})
        return saved

    async def change_locale(self, locale: Locale) -> Locale:
        """
        Persist the preferred locale of the current user and switch to it.

        Raises:
            PersistenceError: If the backend rejects the write
        """
        user_id = self._require_user()
        generation = self._generation
        try:
            saved = await self.backend.update_preferred_locale(user_id, Locale(locale))
        except PersistenceError:
            if self._generation == generation:
                self.snapshot = self.snapshot.model_copy(
                    update={"message": message_for(self.locale, "locale_failed")}
                )
            raise
        if self._is_current(generation):
            self.locale = saved
            profile = self.snapshot.profile
            if profile is not None:
                profile = profile.model_copy(update={"preferred_locale": saved})
            self.snapshot = self.snapshot.model_copy(update={"profile": profile, "message": None})
        return saved
