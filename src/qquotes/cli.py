import click
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, PATH_CONFIG_FILE, load_config
from .errors import ConfigError, InputError, QuotesError
from .formatting import quotes_table
from .logs import TRACE, get_logger, setup_logging
from .repository import Quote, Repository
from .storage.jsonfile import JsonStore

VERSION = "1.0.0"

console = Console()
err_console = Console(stderr=True)


class QuotesGroup(click.Group):
    """Report any qquotes error on stderr and exit with status 1."""

    def invoke(self, ctx: click.Context):
        try:
            rv = super().invoke(ctx)
        except QuotesError as exc:
            log = get_logger()
            if log.handlers:
                log.error("%s", exc)
            else:
                err_console.print(f"[red]Error:[/] {exc}", markup=True, highlight=False)
            raise SystemExit(1)
        get_logger().log(TRACE, "exit_app")
        return rv


@click.group(cls=QuotesGroup, invoke_without_command=True, help="qquotes - store quotes")
@click.version_option(VERSION, prog_name="qquotes")
@click.option(
    "--verbose", "-v", count=True, help="Shows details about the results of running qquotes"
)
@click.option(
    "--config",
    "config_path",
    default=PATH_CONFIG_FILE,
    show_default=True,
    envvar="QQUOTES_CONFIG",
    help="TOML config file",
)
@click.pass_context
def app(ctx: click.Context, verbose: int, config_path: str):
    config_problem = None
    try:
        app_config, config_found = load_config(config_path)
    except ConfigError as exc:
        app_config, config_found = AppConfig(), False
        config_problem = exc

    log = setup_logging(verbose, app_config.log_path)
    log.log(TRACE, "app_setup")
    if config_problem is not None:
        log.warning("config_file_invalid %s, using defaults", config_problem)
    elif config_found:
        log.log(TRACE, "config_file_loaded")
    else:
        log.log(TRACE, "config_file_not_found")
    log.log(TRACE, "config_parameter_log_path %s", app_config.log_path)
    log.log(TRACE, "config_parameter_data_path %s", app_config.data_path)

    ctx.obj = Repository(JsonStore(app_config.data_path), logger=log)
    log.log(TRACE, "repository_initialized")
    log.log(TRACE, "app_setup_complete")

    if ctx.invoked_subcommand is None:
        console.print("No default action. Please see qquotes --help for more information")
        return
    log.log(TRACE, "processing_started")


def ask(label: str) -> str:
    """Prompt on stdout and read one line from stdin, without its newline."""
    console.print(f"{label} ⏵ ", end="", markup=False, highlight=False)
    try:
        line = click.get_text_stream("stdin").readline()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Could not read {label.strip()}: {exc}") from exc
    if not line:
        raise InputError(f"Could not read {label.strip()}: end of input")
    return line.rstrip("\r\n")


@app.command("add")
@click.pass_obj
def add(repo: Repository):
    """Add a quote."""
    author = ask("author")
    quote = ask("quote ")
    repo.save_quote(Quote(author=author, quote=quote))
    console.print(f"[bold green]Saved[/]. Total quotes: {repo.count_quotes()}")


@app.command("list")
@click.option("--long-format", "-l", is_flag=True, help="Display all information such as IDs")
@click.pass_obj
def list_quotes(repo: Repository, long_format: bool):
    """Prints all quotes."""
    quotes = repo.get_quotes()
    if not quotes:
        console.print("There is no quote saved.")
        return
    console.print(quotes_table(quotes, long_format, term_width=console.width))


@app.command("delete")
@click.argument("quote_id", metavar="QUOTE_ID")
@click.pass_obj
def delete(repo: Repository, quote_id: str):
    """Delete a quote by ID."""
    repo.delete_quote(quote_id)
    console.print(f"[bold green]Deleted[/] {escape(quote_id)}. Total quotes: {repo.count_quotes()}")


if __name__ == "__main__":
    app()
