from ticker.main import cli

cli()
