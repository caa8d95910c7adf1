from omoconfig.cli import app

app(prog_name="omo-config")
