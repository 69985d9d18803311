from singlehtml.cli import app

app(prog_name="singlehtml")
