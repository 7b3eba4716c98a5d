import click
import yaml

from famcare_backend.cli.common import handle_api_exceptions
from famcare_backend.permissions.conditions import describe_condition
from famcare_backend.permissions.context import AccessContext
from famcare_backend.permissions.engine import AccessDecisionEngine
from famcare_backend.permissions.rules import ResourceType, default_registry

RESOURCE_TYPES = [t.value for t in ResourceType]

@click.command()
@click.option("--type", "-t", "resource_type", type=click.Choice(RESOURCE_TYPES), default=None)
def list_rules(resource_type):

  registry = default_registry()
  types = [ResourceType(resource_type)] if resource_type else registry.resource_types()

  for rtype in types:
    click.echo(f"{click.style(rtype.value,fg='green')}:")
    for rule in registry.get_rules(rtype) or ():
      click.echo(f"  {rule.access_level.value:<7} {describe_condition(rule.condition)}  # {rule.description}")

@click.command()
@click.option("--context", "-c", "context_file", type=click.File("r"), required=True)
@click.option("--type", "-t", "resource_type", type=click.Choice(RESOURCE_TYPES), prompt="Type")
@handle_api_exceptions
def explain(context_file, resource_type):

  context = AccessContext(**(yaml.safe_load(context_file) or {}))

  details = AccessDecisionEngine(default_registry()).get_access_details(context, ResourceType(resource_type))

  click.echo(f"Access level: {click.style(details.access_level.value,fg='green')}")
  for rule in details.matched_rules:
    click.echo(f"  matched: {rule.description} ({rule.access_level.value})")
  for flag in ["can_read", "can_write", "can_delete", "can_admin"]:
    click.echo(f"  {flag}: {getattr(details, flag)}")

@click.group()
def rules():
    pass

rules.add_command(list_rules,"list")
rules.add_command(explain,"explain")
