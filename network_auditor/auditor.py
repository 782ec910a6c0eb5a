"""Count where each plugin or theme is active across a network.

Two steps make up a report:

* :func:`aggregate` walks every site once, in order, and records for each
  item how many sites have it active and which ones.
* :func:`build_report` filters those totals by active-site range and site
  membership, then sorts the surviving rows.

What counts as "active on a site" comes from a provider object. Providers
expose ``active_items(site)`` as a context manager so that any per-site
setup (such as switching the current site) is always undone before the
next site is read.
"""
from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ContextManager, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence

from .network import Network
from .wordpress_client import WordPressSite

logger = logging.getLogger(__name__)


class ItemProvider(Protocol):
    def active_items(self, site: WordPressSite) -> ContextManager[List[str]]:
        ...


class PluginLister:
    """Active plugins, read with the site switched in as the current site."""

    def __init__(self, network: Network) -> None:
        self.network = network

    @contextmanager
    def active_items(self, site: WordPressSite) -> Iterator[List[str]]:
        with self.network.switch_to_site(site.id):
            yield list(self.network.get_active_plugins())


class ThemeLister:
    """The single active theme of a site; no context switch needed."""

    def __init__(self, network: Network) -> None:
        self.network = network

    @contextmanager
    def active_items(self, site: WordPressSite) -> Iterator[List[str]]:
        theme = self.network.get_active_theme(site.id)
        yield [theme] if theme else []


PROVIDERS = {
    'plugins': PluginLister,
    'themes': ThemeLister,
}


def provider_for(kind: str, network: Network) -> ItemProvider:
    try:
        return PROVIDERS[kind](network)
    except KeyError:
        raise ValueError(f"Unknown report type: {kind!r}") from None


@dataclass
class ActiveItems:
    """Per-item active-site totals from one pass over the network."""
    counts: Dict[str, int] = field(default_factory=dict)
    site_ids: Dict[str, List[int]] = field(default_factory=dict)


def aggregate(
    sites: Iterable[WordPressSite],
    candidate_items: Sequence[str],
    provider: ItemProvider,
) -> ActiveItems:
    """Count on how many sites each item is active.

    Every candidate starts at zero. Items a site reports that are not among
    the candidates are still counted. Sites are processed one at a time in
    the order given.
    """
    result = ActiveItems(
        counts={item: 0 for item in candidate_items},
        site_ids={item: [] for item in candidate_items},
    )
    for site in sites:
        with provider.active_items(site) as items:
            logger.debug("Site %s: %d active items", site.id, len(items))
            for item in items:
                result.counts[item] = result.counts.get(item, 0) + 1
                result.site_ids.setdefault(item, []).append(site.id)
    return result


class OrderBy(str, enum.Enum):
    NAME = 'name'
    ACTIVE_SITES = 'active-sites'


def parse_optional_int(value: object) -> Optional[int]:
    """Read a numeric option; anything unreadable means "not set"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass
class FilterCriteria:
    order_by: OrderBy = OrderBy.NAME
    min_active_sites: Optional[int] = None
    max_active_sites: Optional[int] = None
    site_id: Optional[int] = None

    @classmethod
    def from_options(
        cls,
        order_by: Optional[str] = None,
        min_active_sites: object = None,
        max_active_sites: object = None,
        site_id: object = None,
    ) -> "FilterCriteria":
        """Build criteria from raw command options.

        Unknown ``order_by`` values sort by name, and numbers that do not
        parse are treated as absent rather than rejected.
        """
        try:
            order = OrderBy(order_by) if order_by else OrderBy.NAME
        except ValueError:
            order = OrderBy.NAME
        return cls(
            order_by=order,
            min_active_sites=parse_optional_int(min_active_sites),
            max_active_sites=parse_optional_int(max_active_sites),
            site_id=parse_optional_int(site_id),
        )

    def accepts(self, count: int, site_ids: Sequence[int]) -> bool:
        if self.min_active_sites is not None and count < self.min_active_sites:
            return False
        if self.max_active_sites is not None and count > self.max_active_sites:
            return False
        if self.site_id is not None and self.site_id not in site_ids:
            return False
        return True


@dataclass
class ReportRow:
    name: str
    active_sites: int
    site_ids: List[int]
    label: str = 'Item'

    @property
    def site_ids_display(self) -> str:
        if not self.site_ids:
            return 'None'
        return ', '.join(str(site_id) for site_id in self.site_ids)

    def as_record(self) -> Dict[str, object]:
        return {
            self.label: self.name,
            'Active Sites': self.active_sites,
            'Site IDs': self.site_ids_display,
        }


def build_report(
    counts: Dict[str, int],
    site_ids: Dict[str, List[int]],
    criteria: FilterCriteria,
    primary_label: str = 'Item',
) -> List[ReportRow]:
    """Filter the aggregated totals and sort them into report rows.

    With ``order_by=name`` rows are sorted case-insensitively by item name.
    With ``order_by=active-sites`` the busiest items come first and equal
    counts fall back to name order.
    """
    rows = []
    for item, count in counts.items():
        ids = site_ids.get(item, [])
        if not criteria.accepts(count, ids):
            continue
        rows.append(ReportRow(item, count, list(ids), primary_label))

    if criteria.order_by is OrderBy.ACTIVE_SITES:
        rows.sort(key=lambda row: (-row.active_sites, row.name.lower()))
    else:
        rows.sort(key=lambda row: row.name.lower())
    return rows
