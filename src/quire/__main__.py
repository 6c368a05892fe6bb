from quire.cli import app

app()
