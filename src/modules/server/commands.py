import sys

import click
from .command.serve import ServeCommand


def create_serve_command() -> click.Command:
    """Create the serve command."""

    @click.command(name='serve')
    @click.pass_context
    def serve(ctx):
        """Serve the HTTP API until SIGINT or SIGTERM.

        Reads DATABASE_URL (required), APP_PORT and GRACEFUL_SHUTDOWN_TIMEOUT
        from the environment.
        """
        command = ServeCommand(logger=ctx.obj.logger)
        sys.exit(command.run())

    return serve
