"""
qtest CLI - command line access to the qTest API.

Commands:
- projects: list, get, create, users
- releases: list, get, create, delete
- test-cycles: list, get, create, delete
- users: get
"""

import sys
from typing import Any, Callable, List, Optional

import click

from . import __version__
from .api import QTestClient
from .config import QTestConfig, DEFAULT_TIMEOUT
from .exceptions import QTestError
from .models import Project, Release, TestCycle, TestCycleParent, User
from .utils import (
    OutputFormat,
    format_datetime,
    print_error,
    print_json,
    print_success,
    print_table,
    setup_logging,
    truncate_string,
)


# ============================================================================
# CLI Context and Common Options
# ============================================================================

class QTestContext:
    """CLI context object for sharing state between commands."""
    
    def __init__(self):
        self.config: QTestConfig = QTestConfig()
        self.output_format: OutputFormat = OutputFormat.TABLE
        self._client: Optional[QTestClient] = None
    
    def get_client(self) -> QTestClient:
        """Authenticate on first use and reuse the client afterwards."""
        if self._client is None:
            self._client = QTestClient.from_config(self.config)
        return self._client
    
    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


pass_context = click.make_pass_decorator(QTestContext, ensure=True)


def require_config(f: Callable) -> Callable:
    """Decorator to require subdomain and credentials."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(QTestContext)
        
        if not ctx.config.is_configured():
            print_error(
                "qtest is not configured.",
                "Pass --subdomain, --username and --password or set QTEST_SUBDOMAIN, "
                "QTEST_USERNAME and QTEST_PASSWORD."
            )
            sys.exit(1)
        
        try:
            return click_ctx.invoke(f, *args, **kwargs)
        except QTestError as e:
            print_error(str(e))
            sys.exit(1)
    
    wrapper.__name__ = f.__name__
    wrapper.__doc__ = f.__doc__
    return wrapper


def output(ctx: QTestContext, data: Any, headers: List[str], rows: List[List[Any]]) -> None:
    if ctx.output_format == OutputFormat.JSON:
        print_json(data)
    else:
        print_table(headers, rows)


def _project_rows(projects: List[Project]) -> List[List[Any]]:
    return [
        [p.id, p.name, truncate_string(p.description, 40), format_datetime(p.start_date)]
        for p in projects
    ]


def _release_rows(releases: List[Release]) -> List[List[Any]]:
    return [
        [r.id, r.pid, r.name, format_datetime(r.start_date), format_datetime(r.end_date)]
        for r in releases
    ]


def _cycle_rows(cycles: List[TestCycle]) -> List[List[Any]]:
    return [[c.id, c.pid, c.name, format_datetime(c.created_date)] for c in cycles]


def _user_rows(users: List[User]) -> List[List[Any]]:
    return [[u.id, u.username, u.email, f"{u.first_name or ''} {u.last_name or ''}".strip()] for u in users]


PROJECT_HEADERS = ["ID", "Name", "Description", "Start"]
RELEASE_HEADERS = ["ID", "PID", "Name", "Start", "End"]
CYCLE_HEADERS = ["ID", "PID", "Name", "Created"]
USER_HEADERS = ["ID", "Username", "Email", "Name"]


# ============================================================================
# Main CLI Group
# ============================================================================

@click.group()
@click.version_option(version=__version__, prog_name='qtest')
@click.option('--subdomain', '-s', envvar='QTEST_SUBDOMAIN', help='qTest site (https://<subdomain>.qtestnet.com)')
@click.option('--username', '-u', envvar='QTEST_USERNAME', help='qTest username')
@click.option('--password', '-p', envvar='QTEST_PASSWORD', help='qTest password')
@click.option('--host', envvar='QTEST_HOST', help='Override the site URL')
@click.option('--timeout', '-t', envvar='QTEST_TIMEOUT', type=int, default=DEFAULT_TIMEOUT, show_default=True,
              help='Request timeout in seconds')
@click.option('--no-verify-ssl', is_flag=True, help='Disable SSL certificate verification')
@click.option('-f', '--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress non-essential output')
@click.pass_context
def cli(
    click_ctx,
    subdomain: Optional[str],
    username: Optional[str],
    password: Optional[str],
    host: Optional[str],
    timeout: int,
    no_verify_ssl: bool,
    output_format: str,
    verbose: bool,
    quiet: bool
):
    """
    qtest - qTest test-management command line client.
    
    \b
    Environment Variables:
      QTEST_SUBDOMAIN  - qTest site name
      QTEST_USERNAME   - Username
      QTEST_PASSWORD   - Password
      QTEST_HOST       - Site URL override
    """
    setup_logging(verbose, quiet)
    ctx = click_ctx.ensure_object(QTestContext)
    ctx.config = QTestConfig(
        subdomain=subdomain or "",
        username=username or "",
        password=password or "",
        host=host,
        timeout=timeout,
        verify_ssl=not no_verify_ssl,
    )
    ctx.output_format = OutputFormat(output_format)
    click_ctx.call_on_close(ctx.close)


# ============================================================================
# Projects
# ============================================================================

@cli.group('projects')
def projects():
    """Manage projects."""


@projects.command('list')
@pass_context
@require_config
def list_projects(ctx: QTestContext):
    """List projects."""
    items = ctx.get_client().project_client().list()
    output(ctx, items, PROJECT_HEADERS, _project_rows(items))


@projects.command('get')
@click.argument('project_id', type=int)
@pass_context
@require_config
def get_project(ctx: QTestContext, project_id: int):
    """Show a project."""
    project = ctx.get_client().project_client().get(project_id)
    output(ctx, project, PROJECT_HEADERS, _project_rows([project]))


@projects.command('create')
@click.argument('name')
@click.option('--description', '-d', default='', help='Project description')
@pass_context
@require_config
def create_project(ctx: QTestContext, name: str, description: str):
    """Create a project starting now."""
    project = ctx.get_client().project_client().create(name, description)
    output(ctx, project, PROJECT_HEADERS, _project_rows([project]))


@projects.command('users')
@click.argument('project_id', type=int)
@pass_context
@require_config
def project_users(ctx: QTestContext, project_id: int):
    """List users assigned to a project."""
    users = ctx.get_client().project_client().users(project_id)
    output(ctx, users, USER_HEADERS, _user_rows(users))


# ============================================================================
# Releases
# ============================================================================

@cli.group('releases')
def releases():
    """Manage releases of a project."""


project_option = click.option('--project', '-P', 'project_id', type=int, required=True, help='Project ID')


@releases.command('list')
@project_option
@pass_context
@require_config
def list_releases(ctx: QTestContext, project_id: int):
    """List releases."""
    items = ctx.get_client().release_client(project_id).list()
    output(ctx, items, RELEASE_HEADERS, _release_rows(items))


@releases.command('get')
@project_option
@click.argument('release_id', type=int)
@pass_context
@require_config
def get_release(ctx: QTestContext, project_id: int, release_id: int):
    """Show a release."""
    release = ctx.get_client().release_client(project_id).get(release_id)
    output(ctx, release, RELEASE_HEADERS, _release_rows([release]))


@releases.command('create')
@project_option
@click.argument('name')
@pass_context
@require_config
def create_release(ctx: QTestContext, project_id: int, name: str):
    """Create a release."""
    release = ctx.get_client().release_client(project_id).create(name)
    output(ctx, release, RELEASE_HEADERS, _release_rows([release]))


@releases.command('delete')
@project_option
@click.argument('release_id', type=int)
@pass_context
@require_config
def delete_release(ctx: QTestContext, project_id: int, release_id: int):
    """Delete a release."""
    if ctx.get_client().release_client(project_id).delete(release_id):
        print_success(f"Release {release_id} deleted.")
    else:
        print_error(f"Release {release_id} could not be deleted.")
        sys.exit(1)


# ============================================================================
# Test Cycles
# ============================================================================

@cli.group('test-cycles')
def test_cycles():
    """Manage test cycles of a project."""


@test_cycles.command('list')
@project_option
@pass_context
@require_config
def list_test_cycles(ctx: QTestContext, project_id: int):
    """List test cycles."""
    items = ctx.get_client().test_cycle_client(project_id).list()
    output(ctx, items, CYCLE_HEADERS, _cycle_rows(items))


@test_cycles.command('get')
@project_option
@click.argument('test_cycle_id', type=int)
@pass_context
@require_config
def get_test_cycle(ctx: QTestContext, project_id: int, test_cycle_id: int):
    """Show a test cycle."""
    cycle = ctx.get_client().test_cycle_client(project_id).get(test_cycle_id)
    output(ctx, cycle, CYCLE_HEADERS, _cycle_rows([cycle]))


@test_cycles.command('create')
@project_option
@click.argument('name')
@click.option(
    '--parent-type',
    type=click.Choice([p.value for p in TestCycleParent], case_sensitive=False),
    default=TestCycleParent.ROOT.value,
    show_default=True,
    help='Kind of container to create the test cycle under'
)
@click.option('--parent-id', type=int, default=0, show_default=True, help='Parent container ID')
@pass_context
@require_config
def create_test_cycle(ctx: QTestContext, project_id: int, name: str, parent_type: str, parent_id: int):
    """Create a test cycle."""
    cycle = ctx.get_client().test_cycle_client(project_id).create(
        name, TestCycleParent(parent_type.upper()), parent_id
    )
    output(ctx, cycle, CYCLE_HEADERS, _cycle_rows([cycle]))


@test_cycles.command('delete')
@project_option
@click.argument('test_cycle_id', type=int)
@pass_context
@require_config
def delete_test_cycle(ctx: QTestContext, project_id: int, test_cycle_id: int):
    """Delete a test cycle."""
    if ctx.get_client().test_cycle_client(project_id).delete(test_cycle_id):
        print_success(f"Test cycle {test_cycle_id} deleted.")
    else:
        print_error(f"Test cycle {test_cycle_id} could not be deleted.")
        sys.exit(1)


# ============================================================================
# Users
# ============================================================================

@cli.group('users')
def users():
    """Look up users."""


@users.command('get')
@click.argument('user_id', type=int)
@pass_context
@require_config
def get_user(ctx: QTestContext, user_id: int):
    """Show a user."""
    user = ctx.get_client().user_client().get(user_id)
    output(ctx, user, USER_HEADERS, _user_rows([user]))


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
