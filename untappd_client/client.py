"""HTTP client for the Untappd v3 API."""

from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Any

import httpx
from pydantic import ValidationError

from .config import DEFAULT_TIMEOUT_SECONDS, URI_BASE, Settings
from .errors import (
    AuthenticationRequired,
    InvalidArgument,
    MalformedResponse,
    MissingIdentity,
    ServiceError,
    TransportError,
    UnsupportedOperation,
)
from .schemas import BadgeSort, EnvelopeHeader, TrendingAge, TrendingType

logger = logging.getLogger("untappd_client")

TRENDING_LIMIT_MIN = 1
TRENDING_LIMIT_MAX = 10


def _is_blank(value: Any) -> bool:
    """Return True for values that count as "not provided" for required IDs."""
    return value is None or value == "" or value == 0 or value == "0"


def _trending_limit(limit: Any) -> int:
    """Coerce ``limit`` to an int in 1..10, falling back to 10."""
    if isinstance(limit, bool):
        return TRENDING_LIMIT_MAX
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return TRENDING_LIMIT_MAX
    if not TRENDING_LIMIT_MIN <= value <= TRENDING_LIMIT_MAX:
        return TRENDING_LIMIT_MAX
    return value


def _choice(enum_cls: type[Enum], value: Any, field: str) -> str:
    """Validate ``value`` against a closed enumeration and return its wire form."""
    try:
        return enum_cls(value).value
    except ValueError:
        accepted = ", ".join(member.value for member in enum_cls)
        raise InvalidArgument(
            f"{field} parameter must be one of the following: {accepted}",
            field=field,
            value=value,
        ) from None


class UntappdClient:
    """Thin wrapper around httpx for Untappd API calls.

    Every endpoint method performs at most one blocking GET. The client keeps
    the URI, raw body and decoded body of the most recent request for
    diagnostics; these are reset at the start of each request, never
    accumulated. Instances are not safe to share between threads.
    """

    def __init__(
        self,
        api_key: str,
        username: str | None = None,
        password: str | None = None,
        *,
        base_uri: str = URI_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        verify: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = str(api_key)
        self._base_uri = base_uri.rstrip("/")
        self._auth_token: str | None = None
        self._last_request_uri: str | None = None
        self._last_raw_response: str | None = None
        self._last_parsed_response: Any = None
        self._client = httpx.Client(timeout=timeout, verify=verify, transport=transport)
        self.set_authenticated_user(username, password)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "UntappdClient":
        """Build a client from application settings."""
        return cls(
            settings.untappd_api_key or "",
            settings.untappd_username,
            settings.untappd_password,
            base_uri=settings.untappd_base_url,
            timeout=settings.http_timeout_seconds,
            verify=settings.verify_tls,
            **kwargs,
        )

    def __enter__(self) -> "UntappdClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def set_authenticated_user(self, username: str | None, password: str | None) -> "UntappdClient":
        """Configure (or clear, when either value is empty) the authenticated user.

        Only the MD5 digest of the password is kept.
        """
        if username and password:
            digest = hashlib.md5(str(password).encode("utf-8")).hexdigest()
            self._auth_token = f"{username}:{digest}"
        else:
            self._auth_token = None
        return self

    @property
    def auth_token(self) -> str | None:
        """``username:md5(password)``, or None when unauthenticated."""
        return self._auth_token

    @property
    def last_request_uri(self) -> str | None:
        return self._last_request_uri

    @property
    def last_raw_response(self) -> str | None:
        return self._last_raw_response

    @property
    def last_parsed_response(self) -> Any:
        return self._last_parsed_response

    def _basic_auth(self) -> httpx.BasicAuth | None:
        if self._auth_token is None:
            return None
        # The digest is hex, so the last colon always separates it from the username.
        username, _, digest = self._auth_token.rpartition(":")
        return httpx.BasicAuth(username, digest)

    def _require_identity(self, username: str | None) -> None:
        if not username and self._auth_token is None:
            raise MissingIdentity()

    def execute(
        self,
        path: str,
        parameters: dict[str, Any],
        require_auth: bool = False,
    ) -> dict[str, Any]:
        """Send a GET to ``path`` and return the decoded response envelope.

        Raises:
            AuthenticationRequired: ``require_auth`` is set and no user is configured.
            TransportError: the request could not be completed.
            MalformedResponse: the body is not an object with an ``http_code``.
            ServiceError: ``http_code`` is not 200.
        """
        self._last_request_uri = None
        self._last_raw_response = None
        self._last_parsed_response = None

        if require_auth and self._auth_token is None:
            raise AuthenticationRequired()

        params = dict(parameters)
        params["key"] = self._api_key
        params = {name: value for name, value in params.items() if value is not None and value != ""}

        self._last_request_uri = f"{self._base_uri}/{path}?{httpx.QueryParams(params)}"

        logger.debug("GET /%s (authenticated=%s)", path, self._auth_token is not None)
        try:
            response = self._client.get(self._last_request_uri, auth=self._basic_auth())
        except httpx.RequestError as exc:
            self._last_raw_response = str(exc)
            raise TransportError(f"HTTP transport error: {exc}", {"path": path, "reason": str(exc)}) from exc

        self._last_raw_response = response.text
        try:
            self._last_parsed_response = response.json()
        except ValueError:
            raise MalformedResponse() from None

        if not isinstance(self._last_parsed_response, dict):
            raise MalformedResponse()
        try:
            header = EnvelopeHeader.model_validate(self._last_parsed_response)
        except ValidationError:
            raise MalformedResponse() from None

        if not header.ok:
            raise ServiceError(header.http_code, header.error)

        return self._last_parsed_response

    # Authenticated user

    def my_feed(self, since: int | None = None, offset: int | None = None) -> dict[str, Any]:
        """Return the authenticated user's friend feed."""
        args = {"since": since, "offset": offset}
        return self.execute("feed", args, require_auth=True)

    # Users

    def user_info(self, username: str | None = None) -> dict[str, Any]:
        """Return a user's profile, defaulting to the authenticated user."""
        self._require_identity(username)
        return self.execute("user", {"user": username})

    def user_feed(
        self,
        username: str | None = None,
        since: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return a user's checkins."""
        self._require_identity(username)
        args = {"user": username, "since": since, "offset": offset}
        return self.execute("user_feed", args)

    def user_distinct_beers(self, username: str | None = None, offset: int | None = None) -> dict[str, Any]:
        """Return the distinct beers a user has checked in."""
        self._require_identity(username)
        return self.execute("user_distinct", {"user": username, "offset": offset})

    def user_friends(self, username: str | None = None, offset: int | None = None) -> dict[str, Any]:
        self._require_identity(username)
        return self.execute("friends", {"user": username, "offset": offset})

    def user_wishlist(self, username: str | None = None, offset: int | None = None) -> dict[str, Any]:
        self._require_identity(username)
        return self.execute("wish_list", {"user": username, "offset": offset})

    def user_badges(self, username: str | None = None, sort: BadgeSort | str = BadgeSort.ALL) -> dict[str, Any]:
        """Return the badges a user has won, ordered by ``sort``."""
        self._require_identity(username)
        args = {"user": username, "sort": _choice(BadgeSort, sort, "sort")}
        return self.execute("user_badge", args)

    # Beers

    def beer_info(self, beer_id: int | str) -> dict[str, Any]:
        if _is_blank(beer_id):
            raise InvalidArgument("beer_id parameter must be set and not empty", field="beer_id", value=beer_id)
        return self.execute("beer_info", {"bid": beer_id})

    def beer_search(self, search_string: str) -> dict[str, Any]:
        """Search the beer database for ``search_string``."""
        if _is_blank(search_string):
            raise InvalidArgument(
                "search_string parameter must be set and not empty",
                field="search_string",
                value=search_string,
            )
        return self.execute("beer_search", {"q": search_string})

    def beer_checkins(
        self,
        beer_id: int | str,
        since: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return recent checkins of a beer."""
        if _is_blank(beer_id):
            raise InvalidArgument("beer_id parameter must be set and not empty", field="beer_id", value=beer_id)
        args = {"bid": beer_id, "since": since, "offset": offset}
        return self.execute("beer_checkins", args)

    # Venues and breweries

    def venue_info(self, venue_id: int | str) -> dict[str, Any]:
        if _is_blank(venue_id):
            raise InvalidArgument("venue_id parameter must be set and not empty", field="venue_id", value=venue_id)
        return self.execute("venue_info", {"venue_id": venue_id})

    def venue_checkins(
        self,
        venue_id: int | str,
        since: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return recent checkins at a venue."""
        if _is_blank(venue_id):
            raise InvalidArgument("venue_id parameter must be set and not empty", field="venue_id", value=venue_id)
        args = {"venue_id": venue_id, "since": since, "offset": offset}
        return self.execute("venue_checkins", args)

    def brewery_checkins(
        self,
        brewery_id: int | str,
        since: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return recent checkins of any beer from a brewery."""
        if _is_blank(brewery_id):
            raise InvalidArgument(
                "brewery_id parameter must be set and not empty",
                field="brewery_id",
                value=brewery_id,
            )
        args = {"brewery_id": brewery_id, "since": since, "offset": offset}
        return self.execute("brewery_checkins", args)

    # Public

    def public_feed(
        self,
        since: int | None = None,
        offset: int | None = None,
        longitude: float | None = None,
        latitude: float | None = None,
    ) -> dict[str, Any]:
        """Return the public checkin feed ("the pub"), optionally near a location."""
        args = {"since": since, "offset": offset, "geolng": longitude, "geolat": latitude}
        return self.execute("thepub", args)

    def trending(
        self,
        beer_type: TrendingType | str = TrendingType.ALL,
        limit: int | str | None = TRENDING_LIMIT_MAX,
        age: TrendingAge | str = TrendingAge.DAILY,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> dict[str, Any]:
        """Return trending beers.

        ``limit`` outside 1..10, or not a number, falls back to 10 instead of raising.
        """
        category = _choice(TrendingType, beer_type, "type")
        window = _choice(TrendingAge, age, "age")
        limit = _trending_limit(limit)
        args = {
            "type": category,
            "limit": limit,
            "age": window,
            "geolat": latitude,
            "geolng": longitude,
        }
        return self.execute("trending", args)

    def checkin_details(self, checkin_id: int | str) -> dict[str, Any]:
        if _is_blank(checkin_id):
            raise InvalidArgument(
                "checkin_id parameter must be set and not empty",
                field="checkin_id",
                value=checkin_id,
            )
        return self.execute("details", {"id": checkin_id})

    # Write endpoints: the v3 arguments for these were never published.

    def checkin(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        raise UnsupportedOperation("checkin")

    def checkin_comment(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        raise UnsupportedOperation("checkin_comment")

    def checkin_remove_comment(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        raise UnsupportedOperation("checkin_remove_comment")

    def checkin_toast(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        raise UnsupportedOperation("checkin_toast")

    def checkin_remove_toast(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        raise UnsupportedOperation("checkin_remove_toast")
