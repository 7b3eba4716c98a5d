import click
from fastapi import HTTPException
from functools import wraps
from pydantic import ValidationError

def handle_api_exceptions(func):
  @wraps(func)
  def wrapper(*args, **kwargs):
    try:
      return func(*args, **kwargs)
    except HTTPException as e:
      message = e.detail.get("detail") if isinstance(e.detail, dict) else None
      message = message if message != None else e.detail
      click.echo(f"[{click.style(e.status_code,fg='red')}] {message}")
      raise SystemExit(1)
    except ValidationError as e:
      click.echo(f"[{click.style('400',fg='red')}] {e}")
      raise SystemExit(1)

  return wrapper
