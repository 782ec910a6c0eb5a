"""Report entry points and tabular rendering."""
from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import pandas as pd

from .auditor import FilterCriteria, ReportRow, aggregate, build_report, provider_for
from .network import Network

logger = logging.getLogger(__name__)

FORMATS = ('table', 'csv', 'json')


class ReportKind(str, enum.Enum):
    PLUGINS = 'plugins'
    THEMES = 'themes'

    @property
    def column(self) -> str:
        return 'Plugin' if self is ReportKind.PLUGINS else 'Theme'


@dataclass
class AuditReport:
    kind: ReportKind
    rows: List[ReportRow] = field(default_factory=list)

    @property
    def columns(self) -> List[str]:
        return [self.kind.column, 'Active Sites', 'Site IDs']

    @property
    def empty_message(self) -> str:
        return f"No {self.kind.value} found matching the criteria."

    def records(self) -> List[Dict[str, object]]:
        return [row.as_record() for row in self.rows]


def generate_report(network: Network, kind: ReportKind, criteria: FilterCriteria) -> AuditReport:
    """Audit the whole network for one kind of item.

    Raises :class:`~network_auditor.errors.NetworkError` when the network is
    not multisite or has no sites; nothing is aggregated in that case.
    """
    kind = ReportKind(kind)
    sites = network.require_sites()
    if kind is ReportKind.PLUGINS:
        candidates = network.list_known_plugin_ids()
    else:
        candidates = network.list_known_theme_ids()

    active = aggregate(sites, candidates, provider_for(kind.value, network))
    rows = build_report(active.counts, active.site_ids, criteria, kind.column)
    logger.info(
        "%s report: %d of %d items across %d sites",
        kind.column, len(rows), len(active.counts), len(sites),
    )
    return AuditReport(kind, rows)


def plugins_report(network: Network, criteria: FilterCriteria) -> AuditReport:
    return generate_report(network, ReportKind.PLUGINS, criteria)


def themes_report(network: Network, criteria: FilterCriteria) -> AuditReport:
    return generate_report(network, ReportKind.THEMES, criteria)


def render_table(rows: Sequence[ReportRow], columns: Sequence[str], fmt: str = 'table') -> str:
    """Format report rows for the terminal.

    ``fmt`` is one of ``table``, ``csv`` or ``json``.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")
    records = [row.as_record() for row in rows]
    if fmt == 'json':
        return json.dumps([{column: record[column] for column in columns} for record in records])
    df = pd.DataFrame(records, columns=list(columns))
    if fmt == 'csv':
        return df.to_csv(index=False).rstrip('\n')
    return df.to_string(index=False)
