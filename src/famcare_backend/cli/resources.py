import click

from famcare_backend.cli.common import handle_api_exceptions
from famcare_backend.database import get_db
from famcare_backend.interface.resources import ResourceList
from famcare_backend.permissions.query_builders import ResourceVisibilityQueryBuilder
from famcare_backend.permissions.store import SqlAccessStore

@click.command()
@click.option("--user-id", "-u", "user_id", prompt=True)
@click.option("--limit", "-l", "limit", type=int, default=100)
@handle_api_exceptions
def visible(user_id, limit):

  db_session = get_db()
  db = next(db_session)
  try:
    user = SqlAccessStore(db).get_user_or_throw(user_id)

    query = ResourceVisibilityQueryBuilder.build_visible_resources_query(db, user.id, user.role, user.family_id)

    for resource in query.limit(limit).all():
      click.echo(f"{ResourceList.model_validate(resource).model_dump_json(indent=4)}")
  finally:
    db_session.close()

@click.group()
def resources():
    pass

resources.add_command(visible,"visible")
