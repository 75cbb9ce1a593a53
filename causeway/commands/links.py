"""Link check CLI commands."""

import click
from flask.cli import with_appcontext

from causeway.services.health import HealthService


@click.group('links')
def link_commands():
    """External link maintenance commands."""
    pass


@link_commands.command('check')
@click.option('--timeout', type=float, default=None, help='Per-URL timeout in seconds (default: LINK_CHECK_TIMEOUT)')
@click.option('--background', is_flag=True, help='Queue the run for the RQ worker instead')
@with_appcontext
def check_links(timeout, background):
    """Probe the external URLs of published resources."""
    if background:
        from causeway.services.queue import queue_service
        job = queue_service.enqueue_link_check()
        click.echo(click.style(f'Queued link check job {job.id}', fg='green'))
        return

    result = HealthService.run_link_check(timeout=timeout)
    color = 'red' if result['broken'] else 'green'
    click.echo(click.style(
        f"Checked {result['checked']} links, {result['broken']} broken",
        fg=color,
    ))
