from __future__ import annotations

from pathlib import Path

import pandas as pd
import typer

from network_auditor.auditor import FilterCriteria, OrderBy
from network_auditor.config import DEFAULT_CONFIG_PATH, AuditorConfig, load_config
from network_auditor.errors import NetworkAuditorError
from network_auditor.logging import configure_logging
from network_auditor.network import Network
from network_auditor.report import FORMATS, ReportKind, generate_report, render_table

app = typer.Typer(no_args_is_help=True, add_completion=False)

CONFIG_OPTION = typer.Option(DEFAULT_CONFIG_PATH, "--config", resolve_path=True)


def _load_app_config(config_path: Path) -> AuditorConfig:
    return load_config(config_path)


def _load_network(config_path: Path) -> Network:
    cfg = _load_app_config(config_path)
    configure_logging(cfg.log_level)
    return Network(cfg.sites_path, timeout=cfg.request_timeout)


def _run_report(
    kind: ReportKind,
    config: Path,
    order_by: OrderBy,
    min_active_sites: str | None,
    max_active_sites: str | None,
    site_id: str | None,
    fmt: str,
) -> None:
    if fmt not in FORMATS:
        raise typer.BadParameter(f"Expected one of: {', '.join(FORMATS)}", param_hint="--format")
    criteria = FilterCriteria.from_options(order_by, min_active_sites, max_active_sites, site_id)
    network = _load_network(config)
    try:
        report = generate_report(network, kind, criteria)
    except NetworkAuditorError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not report.rows:
        typer.echo(report.empty_message)
        return
    typer.echo(render_table(report.rows, report.columns, fmt))


@app.command()
def plugins(
    order_by: OrderBy = typer.Option(OrderBy.NAME, "--order-by", help="Order by 'name' or 'active-sites'."),
    min_active_sites: str | None = typer.Option(
        None, help="Only display plugins active on at least this number of sites."
    ),
    max_active_sites: str | None = typer.Option(
        None, help="Only display plugins active on no more than this number of sites."
    ),
    site_id: str | None = typer.Option(None, help="Only display plugins active on a particular site."),
    fmt: str = typer.Option("table", "--format", help="table, csv or json."),
    config: Path = CONFIG_OPTION,
) -> None:
    """List all plugins in the network and how many sites they are active on."""
    _run_report(ReportKind.PLUGINS, config, order_by, min_active_sites, max_active_sites, site_id, fmt)


@app.command()
def themes(
    order_by: OrderBy = typer.Option(OrderBy.NAME, "--order-by", help="Order by 'name' or 'active-sites'."),
    min_active_sites: str | None = typer.Option(
        None, help="Only display themes active on at least this number of sites."
    ),
    max_active_sites: str | None = typer.Option(
        None, help="Only display themes active on no more than this number of sites."
    ),
    site_id: str | None = typer.Option(None, help="Only display themes active on a particular site."),
    fmt: str = typer.Option("table", "--format", help="table, csv or json."),
    config: Path = CONFIG_OPTION,
) -> None:
    """List all themes in the network and how many sites they are active on."""
    _run_report(ReportKind.THEMES, config, order_by, min_active_sites, max_active_sites, site_id, fmt)


@app.command()
def sites(config: Path = CONFIG_OPTION) -> None:
    """List the sites registered for the network."""
    network = _load_network(config)
    registered = network.list_sites()
    if not registered:
        typer.echo("No sites found in the network.")
        return
    df = pd.DataFrame([{"ID": s.id, "URL": s.url} for s in registered])
    typer.echo(df.to_string(index=False))


@app.command("add-site")
def add_site(
    url: str = typer.Option(..., help="Site address, e.g. https://example.com/blog."),
    username: str = typer.Option(...),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Application password."),
    config: Path = CONFIG_OPTION,
) -> None:
    """Register a network site and its application password."""
    network = _load_network(config)
    # Application passwords are shown with spaces; WordPress accepts them without.
    site = network.add_site(url, username, "".join(password.split()))
    typer.echo(f"Added site {site.id}: {site.url}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
