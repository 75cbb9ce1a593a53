"""CLI commands for Causeway."""

from .links import link_commands
from .seed import seed_commands
from .user import user_commands


def register_commands(app):
    """Register all CLI command groups with the Flask app."""
    app.cli.add_command(link_commands)
    app.cli.add_command(seed_commands)
    app.cli.add_command(user_commands)
