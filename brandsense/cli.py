# File: brandsense/cli.py

"""
Brand Sense command line dashboard.

Examples:
    brandsense serve --reload
    brandsense signin jane@acme.io
    brandsense create --name "Acme" --market "United States" --language English --wait
    brandsense report identity
"""

import functools
from pathlib import Path
from typing import Optional

import click

from brandsense.client.api import DEFAULT_BASE_URL, ApiError, BrandSenseClient
from brandsense.client.cache import DEFAULT_CACHE_PATH, LocalCache, should_suggest_refresh
from brandsense.client.dashboard import DELETE_CONFIRMATION, Dashboard, DashboardError
from brandsense.client.poller import PollResult
from brandsense.client.reports import REPORT_BUILDERS, ReportView
from brandsense.client.session import validate_user_session
from brandsense.core.logging import configure_logging


def handle_errors(f):
    """Turn API and dashboard failures into clean CLI errors."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ApiError as e:
            if e.is_network_error:
                raise click.ClickException(f"Cannot reach the API: {e.detail}") from e
            if e.is_unauthorized:
                raise click.ClickException(f"{e.detail}. Run `brandsense signin`.") from e
            raise click.ClickException(f"{e.detail} (HTTP {e.status_code})") from e
        except DashboardError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def get_dashboard(ctx: click.Context) -> Dashboard:
    obj = ctx.ensure_object(dict)
    if "dashboard" not in obj:
        cache = LocalCache(obj.get("cache_path"))
        client = BrandSenseClient(obj.get("api_url", DEFAULT_BASE_URL), cache.get_access_token())
        obj["dashboard"] = Dashboard(cache, client)
    return obj["dashboard"]


def with_dashboard(f):
    @functools.wraps(f)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        return f(get_dashboard(ctx), *args, **kwargs)

    return wrapper


def _print_project_line(project: dict, selected_id: Optional[str]) -> None:
    marker = "*" if project["id"] == selected_id else " "
    click.echo(
        f"{marker} {project['name']}  [{project.get('dataStatus', 'pending')}]  "
        f"{project.get('market')} / {project.get('language')}  ({project['id']})"
    )
    if should_suggest_refresh(project):
        click.echo("    Data is over a week old; consider `brandsense refresh`.")


def _print_poll_tick(result: PollResult) -> None:
    click.echo(f"  poll #{result.attempts}: {result.status or 'unavailable'}")


def _print_poll_result(result: PollResult) -> None:
    if result.is_ready:
        click.echo("Analysis ready.")
    elif result.status == "error":
        raise click.ClickException("Analysis failed. Try `brandsense refresh` again later.")
    elif result.timed_out:
        click.echo("Analysis is still processing; check back with `brandsense show`.")


def _print_report(view: ReportView) -> None:
    click.echo(f"\n{'=' * 60}")
    click.echo(f"{view.brand_name}: {view.kind}")
    click.echo(f"{'=' * 60}\n")

    if view.mismatched_brand:
        click.echo(
            f"Cached data references {view.mismatched_brand!r}, not this project. "
            "Run `brandsense recover` to reload it."
        )
    elif view.is_placeholder:
        click.echo("Analysis data will appear here once processing is complete.")

    s = view.sections
    if view.kind == "identity":
        click.echo(f"Brand Power Metric: {s['totalBPM']}")
        for name, score, _ in s["bpm"]:
            click.echo(f"  {name:<22}{score:>4}")
        if s["tone"]:
            click.echo("\nTone of voice:")
            for trait, score in s["tone"]:
                click.echo(f"  {trait:<22}{score:>4}")
        if s["brandPowerStatement"]:
            click.echo(f"\n{s['brandPowerStatement']}")
        if s["keyAssociations"]:
            click.echo(f"\nKey associations: {', '.join(s['keyAssociations'])}")
    elif view.kind == "sentiment":
        if s["overallSummary"]:
            click.echo(f"{s['overallSummary']}\n")
        for category, score, themes in s["primarySentiments"]:
            click.echo(f"  {category:<12}{score:>4}%  {themes}")
        for name, score, _ in s["emotionalClusters"]:
            click.echo(f"  {name:<22}{score:>4}")
    elif view.kind == "keywords":
        if s["summary"]:
            click.echo(f"{s['summary']}\n")
        for keyword, visibility, trend, tone, share, _ in s["keywords"]:
            click.echo(f"  {keyword:<22}{visibility:>4}  {trend:<6} {tone:<9} {share}%")


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--cache-path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="BRANDSENSE_CACHE",
    default=DEFAULT_CACHE_PATH,
    show_default=True,
    help="Local dashboard cache file",
)
@click.option(
    "--api-url",
    envvar="BRANDSENSE_API_URL",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Brand Sense API base URL",
)
@click.option("--log-level", default="WARNING", help="Client log level")
@click.pass_context
def cli(ctx, cache_path: Path, api_url: str, log_level: str):
    """
    Brand Sense - track how ChatGPT perceives your brand.
    """
    configure_logging(log_level)
    obj = ctx.ensure_object(dict)
    obj.setdefault("cache_path", cache_path)
    obj.setdefault("api_url", api_url)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("brandsense.main:app", host=host, port=port, reload=reload)


@cli.command()
@with_dashboard
@handle_errors
def health(dashboard: Dashboard):
    """Check that the API is up and show which integrations are configured."""
    body = dashboard.client.health()
    click.echo(f"API: {body.get('status', 'unknown')}")
    for name, enabled in body.get("environment", {}).items():
        click.echo(f"  {name:<14}{'yes' if enabled else 'no'}")


# -----------------------------
# AUTH
# -----------------------------
@cli.command()
@click.argument("email")
@click.option("--full-name", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_dashboard
@handle_errors
def signup(dashboard: Dashboard, email: str, full_name: str, password: str):
    """Create an account with a corporate email."""
    user = dashboard.sign_up(email, password, full_name)
    click.echo(f"Account created for {user['email']}. Sign in with `brandsense signin {user['email']}`.")


@cli.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
@with_dashboard
@handle_errors
def signin(dashboard: Dashboard, email: str, password: str):
    """Sign in and load your projects."""
    user = dashboard.sign_in(email, password)
    projects = dashboard.sync_projects()
    click.echo(f"Welcome back, {user['fullName']}.")
    if projects:
        click.echo(f"{len(projects)} project(s) loaded.")
    else:
        click.echo("No projects yet. Create one with `brandsense create`.")


@cli.command()
@with_dashboard
def signout(dashboard: Dashboard):
    """Sign out and clear the local cache."""
    dashboard.sign_out()
    click.echo("Signed out.")


@cli.command()
@with_dashboard
@handle_errors
def whoami(dashboard: Dashboard):
    """Show the signed-in user."""
    dashboard.require_token()
    user = dashboard.client.session()["user"]
    click.echo(f"{user['fullName']} <{user['email']}>")


@cli.command("change-password")
@click.option("--current-password", prompt=True, hide_input=True)
@click.option("--new-password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_dashboard
@handle_errors
def change_password(dashboard: Dashboard, current_password: str, new_password: str):
    """Change your password."""
    click.echo(dashboard.change_password(current_password, new_password))


@cli.command()
@with_dashboard
@handle_errors
def status(dashboard: Dashboard):
    """Validate the cached session against the API."""
    result = validate_user_session(dashboard.cache, dashboard.client)
    click.echo(f"Session valid: {'yes' if result.is_valid else 'no'}")
    click.echo(f"Screen: {result.screen}")


# -----------------------------
# PROJECTS
# -----------------------------
@cli.command()
@with_dashboard
@handle_errors
def projects(dashboard: Dashboard):
    """List your projects (* marks the selected one)."""
    items = dashboard.sync_projects()
    if not items:
        click.echo("No projects found.")
        click.echo("\nCreate your first project with: brandsense create")
        return
    selected = dashboard.cache.get_selected_project_id()
    for project in items:
        _print_project_line(project, selected)


@cli.command()
@click.option("--name", prompt="Brand name")
@click.option("--market", prompt=True)
@click.option("--language", prompt=True)
@click.option("--industry")
@click.option("--website-url")
@click.option("--description")
@click.option("--wait", is_flag=True, help="Poll until the analysis finishes")
@with_dashboard
@handle_errors
def create(dashboard: Dashboard, wait: bool, **fields):
    """Create a project and start its analysis."""
    fields = {k: v for k, v in fields.items() if v is not None}
    project = dashboard.create_project(**fields)
    click.echo(f"Project created: {project['name']} ({project['id']})")
    click.echo("Analysis is now processing.")
    if wait:
        _print_poll_result(dashboard.wait_for_analysis(project["id"], on_tick=_print_poll_tick))


@cli.command()
@click.argument("project_id")
@with_dashboard
@handle_errors
def select(dashboard: Dashboard, project_id: str):
    """Select the project reports are shown for."""
    project = dashboard.select_project(project_id)
    click.echo(f"Selected {project['name']}.")


def _resolve_project_id(dashboard: Dashboard, project_id: Optional[str]) -> str:
    if project_id:
        return project_id
    selected = dashboard.cache.get_selected_project_id()
    if not selected:
        raise DashboardError("No project selected. Pass a project id or run `brandsense select`.")
    return selected


@cli.command()
@click.argument("project_id", required=False)
@with_dashboard
@handle_errors
def show(dashboard: Dashboard, project_id: Optional[str]):
    """Show a project and load its analysis data."""
    project_id = _resolve_project_id(dashboard, project_id)
    dashboard.fetch_project_data(project_id)
    project = dashboard.cache.get_project(project_id)
    if project is None:
        raise DashboardError(f"Project {project_id} no longer exists and was removed from the cache.")

    click.echo(f"{project['name']}  [{project.get('dataStatus')}]")
    for label, key in (
        ("Market", "market"),
        ("Language", "language"),
        ("Industry", "industry"),
        ("Website", "websiteUrl"),
        ("Description", "description"),
        ("Timeframe", "timeframe"),
        ("AI model", "aiModel"),
        ("Last refreshed", "lastRefreshedAt"),
    ):
        if project.get(key):
            click.echo(f"  {label}: {project[key]}")
    if should_suggest_refresh(project):
        click.echo("  Data is over a week old; consider `brandsense refresh`.")


@cli.command()
@click.argument("project_id")
@click.option("--name")
@click.option("--market")
@click.option("--language")
@click.option("--industry")
@click.option("--website-url")
@click.option("--description")
@with_dashboard
@handle_errors
def edit(dashboard: Dashboard, project_id: str, **fields):
    """Update project fields."""
    fields = {k: v for k, v in fields.items() if v is not None}
    if not fields:
        raise click.UsageError("Nothing to update")
    project = dashboard.update_project(project_id, **fields)
    click.echo(f"Project updated: {project['name']}")


@cli.command()
@click.argument("project_id")
@click.option(
    "--confirm",
    prompt=f'Type "{DELETE_CONFIRMATION}" to permanently delete this project',
    help=f'Must be "{DELETE_CONFIRMATION}"',
)
@with_dashboard
@handle_errors
def delete(dashboard: Dashboard, project_id: str, confirm: str):
    """Delete a project and all its analysis data."""
    name = dashboard.delete_project(project_id, confirm)
    click.echo(f"Deleted {name or project_id}.")


@cli.command()
@click.argument("project_id", required=False)
@with_dashboard
@handle_errors
def refresh(dashboard: Dashboard, project_id: Optional[str]):
    """Re-run the analysis and wait for it to finish."""
    project_id = _resolve_project_id(dashboard, project_id)
    click.echo("Refresh in progress...")
    _print_poll_result(dashboard.refresh(project_id, on_tick=_print_poll_tick))


@cli.command()
@click.argument("kind", type=click.Choice(sorted(REPORT_BUILDERS)))
@with_dashboard
@handle_errors
def report(dashboard: Dashboard, kind: str):
    """Show a report for the selected project."""
    _print_report(dashboard.report(kind))


@cli.command()
@with_dashboard
@handle_errors
def recover(dashboard: Dashboard):
    """Clear cached data and reload projects from the API."""
    count = dashboard.recover()
    click.echo(f"Recovered {count} project(s).")


# -----------------------------
# FEEDBACK
# -----------------------------
@cli.command()
@click.argument("message")
@click.option("--rating", type=click.IntRange(1, 10), prompt="Rating (1-10)")
@with_dashboard
@handle_errors
def feedback(dashboard: Dashboard, message: str, rating: int):
    """Send feedback to the Brand Sense team."""
    click.echo(dashboard.send_feedback(message, rating))


if __name__ == "__main__":
    cli()
