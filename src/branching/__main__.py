from branching.cli.app import app

app(prog_name="branching")
