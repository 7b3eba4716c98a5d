import logging
import click

from famcare_backend.settings import settings
from .rules import rules
from .resources import resources

@click.group()
def cli():
    logging.basicConfig(level=settings.LOG_LEVEL)

cli.add_command(rules,"rules")
cli.add_command(resources,"resources")

if __name__ == '__main__':
    cli()
