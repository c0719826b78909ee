from copyrec.cli import cli

cli()
