import typer
from typing_extensions import Annotated
from .context import AppContext
from .commands.down import down
from .commands.check import check

app = typer.Typer(
    help="Tear down a compose project: containers, networks and optionally volumes.",
    add_completion=False,
)

app.command()(down)
app.command()(check)

@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose output for debugging.",
        ),
    ] = False,
):
    """
    Initialize the AppContext and attach it to the Typer context.
    """
    ctx.obj = AppContext(verbose=verbose)

if __name__ == "__main__":
    app()
