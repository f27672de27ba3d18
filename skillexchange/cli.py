"""Flask CLI commands for out-of-band maintenance jobs."""

import click
from flask import current_app

from skillexchange.errors import NotFoundError
from skillexchange.services.stats import recompute_all, recompute_skill_stats


def register_commands(app):
    @app.cli.command('recompute-stats')
    @click.option('--skill', 'skill_name', default=None, help='Recompute a single skill by name.')
    @click.option('--timeout', type=int, default=None,
                  help='Time budget in seconds for a full run (default STATS_RECOMPUTE_TIMEOUT).')
    def recompute_stats_command(skill_name, timeout):
        """Rebuild catalog skill statistics from all user profiles."""
        if skill_name:
            try:
                stats = recompute_skill_stats(skill_name)
            except NotFoundError as e:
                raise click.ClickException(e.message)
            click.echo(f'{skill_name}: {stats}')
            return

        budget = timeout if timeout is not None else current_app.config['STATS_RECOMPUTE_TIMEOUT']
        result = recompute_all(timeout_seconds=budget)
        click.echo(f"Recomputed {result['processed']}/{result['total']} skills"
                   + (' (timed out)' if result['timedOut'] else ''))
        if result['timedOut']:
            raise SystemExit(1)
