from gitline.cli import app

app(prog_name="gitline")
