import asyncio
import json
import sys
from collections.abc import Callable
from typing import Any

import typer

from monthly_storage.config import StorageSettings
from monthly_storage.errors import ConfigurationError
from monthly_storage.log import setup_logging
from monthly_storage.services.storage_builder import JsonResult, StorageBuilder, storage

app = typer.Typer(help="Monthly Cloud Storage client", no_args_is_help=True)
find_app = typer.Typer(help="Convenience finders")
config_app = typer.Typer(help="Configuration commands")

app.add_typer(find_app, name="find")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    ctx: typer.Context,
    storage_url: str | None = typer.Option(
        None, "--storage-url", help="Base URL (defaults to MONTHLY_CLOUD_STORAGE_URL)"
    ),
    website: int | None = typer.Option(None, "--website", help="Website id"),
    marketplace: int | None = typer.Option(None, "--marketplace", help="Marketplace id"),
    list_id: int | None = typer.Option(None, "--list", help="List id"),
    locale: str | None = typer.Option(None, "--locale", help="Locale segment"),
) -> None:
    settings = StorageSettings()
    setup_logging(settings.log_level, stream=sys.stderr)

    builder = storage(storage_url, settings=settings)
    builder.set_website(website).set_marketplace(marketplace).set_list(list_id)
    if locale:
        builder.set_locale(locale)
    ctx.obj = builder


def _print_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fetch(request: Callable[[], JsonResult]) -> None:
    try:
        pending = request()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    _print_json(asyncio.run(pending))


@app.command("url")
def url(
    ctx: typer.Context,
    endpoint: str = typer.Argument(..., help='Endpoint, e.g. "contents" or "/marketplaces"'),
    id: int | None = typer.Option(None, "--id", help="Resource id"),
) -> None:
    builder: StorageBuilder = ctx.obj
    typer.echo(builder.set_endpoint(endpoint).set_id(id).build_url())


@app.command("get")
def get(
    ctx: typer.Context,
    endpoint: str = typer.Argument(..., help="Endpoint to fetch"),
    id: int | None = typer.Option(None, "--id", help="Resource id"),
) -> None:
    builder: StorageBuilder = ctx.obj
    _fetch(lambda: builder.set_endpoint(endpoint).set_id(id).get())


@find_app.command("routes")
def find_routes(ctx: typer.Context, locale: str | None = typer.Argument(None)) -> None:
    _fetch(lambda: ctx.obj.get_routes(locale))


@find_app.command("menus")
def find_menus(ctx: typer.Context, locale: str | None = typer.Argument(None)) -> None:
    _fetch(lambda: ctx.obj.get_menus(locale))


@find_app.command("content")
def find_content(ctx: typer.Context, content_id: int) -> None:
    _fetch(lambda: ctx.obj.find_content(content_id))


@find_app.command("listing")
def find_listing(ctx: typer.Context, listing_id: int) -> None:
    _fetch(lambda: ctx.obj.find_listing(listing_id))


@find_app.command("location")
def find_location(ctx: typer.Context, geocode: int) -> None:
    _fetch(lambda: ctx.obj.get_location(geocode))


@find_app.command("profile")
def find_profile(ctx: typer.Context, profile_id: str) -> None:
    _fetch(lambda: ctx.obj.find_profile(profile_id))


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    builder: StorageBuilder = ctx.obj
    typer.echo(f"Storage URL: {builder.get_storage_url() or '(unset)'}")
    typer.echo(f"Timeout: {builder.settings.timeout}s")


if __name__ == "__main__":
    app()
