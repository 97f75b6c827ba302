from termshell.cli import app

app()
