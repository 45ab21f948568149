import click


@click.group()
def main() -> None:
    """n8nhub - one API surface over several n8n instances."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from N8NHUB_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from N8NHUB_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the HTTP server."""
    import uvicorn

    from n8nhub.hub.settings import HubSettings

    settings = HubSettings()

    uvicorn.run(
        "n8nhub.hub.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
def workspaces() -> None:
    """Show the workspaces discovered from the environment."""
    from n8nhub.hub.log import setup_logging
    from n8nhub.hub.settings import HubSettings
    from n8nhub.hub.workspaces import WorkspaceRegistry, describe_workspace_config

    setup_logging(HubSettings().log_level)

    registry = WorkspaceRegistry()
    config = registry.get()

    click.echo(describe_workspace_config(config, registry.keys))
    for definition in config.workspaces.values():
        marker = "*" if definition.name == config.default_workspace else " "
        click.echo(
            f"{marker} {definition.name:<16} {definition.url}  ({definition.url_env_var} + {definition.token_env_var})"
        )


if __name__ == "__main__":
    main()
