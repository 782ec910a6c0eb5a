"""Registry of the sites that make up a WordPress multisite network."""
from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import NoSitesError, NotMultisiteError, SiteNotFoundError
from .wordpress_client import WordPressClient, WordPressSite

logger = logging.getLogger(__name__)


class Network:
    """Sites of one network plus the "current site" the auditor reads from.

    The registry is persisted as JSON. A missing file means no network is
    configured at all; the ``multisite`` flag tells a real multisite network
    apart from a plain list of unrelated installs.
    """

    def __init__(self, storage_path: str | Path = "sites.json", timeout: float = 15.0) -> None:
        self.storage_path = Path(storage_path)
        self.timeout = timeout
        self.multisite = False
        self.clients: List[WordPressClient] = []
        self._context: List[int] = []
        self._load_sites()

    def _load_sites(self) -> None:
        if not self.storage_path.exists():
            return
        with self.storage_path.open() as f:
            data = json.load(f)
        self.multisite = bool(data.get("multisite", False))
        for site in data.get("sites", []):
            wp_site = WordPressSite(int(site["id"]), site["url"], site["username"], site["password"])
            self.clients.append(WordPressClient(wp_site, timeout=self.timeout))
        logger.debug("Loaded %d sites from %s", len(self.clients), self.storage_path)

    def _save_sites(self) -> None:
        data = {
            "multisite": self.multisite,
            "sites": [
                {
                    "id": client.site.id,
                    "url": client.site.url,
                    "username": client.site.username,
                    "password": client.site.password,
                }
                for client in self.clients
            ],
        }
        with self.storage_path.open("w") as f:
            json.dump(data, f, indent=2)

    # Site management -----------------------------------------------------
    def add_site(self, url: str, username: str, password: str) -> WordPressSite:
        """Register a site with the network."""
        next_id = max((c.site.id for c in self.clients), default=0) + 1
        site = WordPressSite(next_id, url, username, password)
        self.clients.append(WordPressClient(site, timeout=self.timeout))
        self.multisite = True
        self._save_sites()
        logger.info("Added site %d (%s)", site.id, url)
        return site

    def is_multisite(self) -> bool:
        return self.storage_path.exists() and self.multisite

    def list_sites(self) -> List[WordPressSite]:
        """Return every site of the network in registration order."""
        return [client.site for client in self.clients]

    def require_sites(self) -> List[WordPressSite]:
        """Return the sites, or fail if there is nothing to audit."""
        if not self.is_multisite():
            raise NotMultisiteError()
        sites = self.list_sites()
        if not sites:
            raise NoSitesError()
        return sites

    def client_for(self, site_id: int) -> WordPressClient:
        for client in self.clients:
            if client.site.id == site_id:
                return client
        raise SiteNotFoundError(site_id)

    @property
    def main_client(self) -> WordPressClient:
        if not self.clients:
            raise NoSitesError()
        return self.clients[0]

    # Site context --------------------------------------------------------
    @property
    def current_site_id(self) -> Optional[int]:
        if self._context:
            return self._context[-1]
        return self.clients[0].site.id if self.clients else None

    @contextmanager
    def switch_to_site(self, site_id: int) -> Iterator[WordPressClient]:
        """Make ``site_id`` the current site until the block exits.

        The previous current site is restored however the block is left,
        and switches may be nested.
        """
        client = self.client_for(site_id)
        self._context.append(site_id)
        try:
            yield client
        finally:
            self._context.pop()

    # Lookups -------------------------------------------------------------
    def get_active_plugins(self) -> List[str]:
        """Active plugins of the current site."""
        site_id = self.current_site_id
        if site_id is None:
            raise NoSitesError()
        return self.client_for(site_id).get_active_plugins()

    def get_active_theme(self, site_id: int) -> Optional[str]:
        return self.client_for(site_id).get_active_theme()

    def list_known_plugin_ids(self) -> List[str]:
        """Plugins installed on the network, as seen from the main site."""
        return [plugin['plugin'] for plugin in self.main_client.list_plugins()]

    def list_known_theme_ids(self) -> List[str]:
        return [theme['stylesheet'] for theme in self.main_client.list_themes()]
