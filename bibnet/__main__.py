from bibnet.cli.main import app

app(prog_name="bibnet")
