"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpages.cli.commands import build_cmd, init_cmd, list_cmd, main_cmd, toc_cmd


app = typer.Typer(name="mdpages", no_args_is_help=True, help="Markdown to HTML page renderer")

app.callback()(main_cmd)
app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="toc")(toc_cmd)
app.command(name="init")(init_cmd)
