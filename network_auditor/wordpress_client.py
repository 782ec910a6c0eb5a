"""Client for reading plugin and theme state from one WordPress site.

The implementation uses the WordPress REST API and basic authentication
with an application password. Only the read-only endpoints needed by the
auditor are covered: installed plugins and themes, and their status.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from requests.auth import HTTPBasicAuth

from .errors import WordPressError

logger = logging.getLogger(__name__)


@dataclass
class WordPressSite:
    """Configuration of a site in the network."""
    id: int
    url: str
    username: str
    password: str


class WordPressClient:
    """Simple client for the WordPress REST API."""

    def __init__(self, site: WordPressSite, timeout: float = 15.0):
        self.site = site
        self.base = site.url.rstrip('/') + '/wp-json/wp/v2'
        self.auth = HTTPBasicAuth(site.username, site.password)
        self.timeout = timeout

    def _handle_response(self, response: requests.Response) -> Any:
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            if getattr(response, "status_code", None) == 401:
                raise WordPressError("Authentication failed (HTTP 401)") from exc
            raise WordPressError(str(exc)) from exc
        return response.json()

    def _get(self, path: str, **params: Any) -> Any:
        url = f"{self.base}/{path}"
        logger.debug("GET %s %s", url, params)
        try:
            response = requests.get(url, params=params, auth=self.auth, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise WordPressError(f"Connection to {self.site.url} failed: {exc}") from exc
        return self._handle_response(response)

    # Public API -----------------------------------------------------------
    def list_plugins(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return the plugins installed on the site.

        Parameters
        ----------
        status: str, optional
            ``"active"`` or ``"inactive"`` to restrict the listing.
        """
        params = {'status': status} if status else {}
        return self._get('plugins', **params) or []

    def get_active_plugins(self) -> List[str]:
        """Return the keys of the plugins activated on this site only.

        Network-activated plugins report the ``network-active`` status and
        are not part of a site's own activation list, so they are skipped.
        """
        return [
            plugin['plugin']
            for plugin in self.list_plugins(status='active')
            if plugin.get('status', 'active') == 'active'
        ]

    def list_themes(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return the themes installed on the site."""
        params = {'status': status} if status else {}
        return self._get('themes', **params) or []

    def get_active_theme(self) -> Optional[str]:
        themes = self.list_themes(status='active')
        if not themes:
            return None
        return themes[0].get('stylesheet') or None
