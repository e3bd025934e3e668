import click
from src.modules.server.commands import create_serve_command
from src.modules.logging import OUTPUT_TYPES, create_logger


class ServiceContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger = None

pass_context = click.make_pass_decorator(ServiceContext, ensure=True)

serve_command = create_serve_command()


@click.group(invoke_without_command=True)
@click.option('--output', '-o',
              type=click.Choice(OUTPUT_TYPES),
              default='plain',
              help='Log format (colorful for terminals, plain for containers, json for log aggregators)',
              envvar='APP_LOG_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              default='INFO',
              help='Set the logging level',
              envvar='APP_LOG_LEVEL')
@pass_context
@click.pass_context
def cli(click_ctx, ctx, output, log_level):
    """Minimal JSON HTTP service with graceful shutdown.

    Runs the serve command when no subcommand is given.
    """
    ctx.logger = create_logger(output, log_level)
    if click_ctx.invoked_subcommand is None:
        click_ctx.invoke(serve_command)

cli.add_command(serve_command)

def main():
    cli()

if __name__ == '__main__':
    main()
