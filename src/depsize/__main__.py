from depsize.cli import app

app()
