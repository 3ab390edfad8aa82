"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdcompile.cli.commands import build_cmd, compile_cmd, main_callback, pages_cmd


app = typer.Typer(name="mdcompile", no_args_is_help=True, help="Markdown to component source compiler")

app.callback()(main_callback)
app.command(name="build")(build_cmd)
app.command(name="compile")(compile_cmd)
app.command(name="pages")(pages_cmd)
