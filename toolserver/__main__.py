from toolserver.cli import app

app()
