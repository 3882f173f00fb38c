import typer

from riffkit.riff import runner as webp

app = typer.Typer()
app.add_typer(webp.app, name='webp')

if __name__ == "__main__":
    app()
