import json

import pytest

from network_auditor.network import Network
from network_auditor.wordpress_client import WordPressClient

INSTALLED_PLUGINS = [
    {"plugin": "akismet/akismet", "status": "active"},
    {"plugin": "Classic-Editor/classic-editor", "status": "inactive"},
    {"plugin": "hello", "status": "active"},
]
INSTALLED_THEMES = [
    {"stylesheet": "twentytwentyfour"},
    {"stylesheet": "twentytwentythree"},
]
ACTIVE_PLUGINS = {1: ["akismet/akismet", "hello"], 2: ["akismet/akismet"], 3: []}
ACTIVE_THEMES = {1: "twentytwentyfour", 2: "twentytwentyfour", 3: None}


def write_sites(path, site_ids, multisite=True):
    path.write_text(json.dumps({
        "multisite": multisite,
        "sites": [
            {"id": i, "url": f"http://site{i}.example", "username": "admin", "password": "secret"}
            for i in site_ids
        ],
    }))
    return path


@pytest.fixture
def sites_file(tmp_path):
    return write_sites(tmp_path / "sites.json", [1, 2, 3])


@pytest.fixture
def network(sites_file, monkeypatch):
    """A three-site network whose REST calls are answered from memory.

    ``network.plugin_reads`` records ``(client site id, current site id)``
    for every active-plugins read.
    """
    net = Network(sites_file)
    net.plugin_reads = []

    def fake_active_plugins(self):
        net.plugin_reads.append((self.site.id, net.current_site_id))
        return list(ACTIVE_PLUGINS[self.site.id])

    monkeypatch.setattr(WordPressClient, "get_active_plugins", fake_active_plugins)
    monkeypatch.setattr(WordPressClient, "get_active_theme", lambda self: ACTIVE_THEMES[self.site.id])
    monkeypatch.setattr(WordPressClient, "list_plugins", lambda self, status=None: list(INSTALLED_PLUGINS))
    monkeypatch.setattr(WordPressClient, "list_themes", lambda self, status=None: list(INSTALLED_THEMES))
    return net
