"""CLI command registration."""


def register_cli(app):
    from reflectdiary.cli.management import diary_cli

    app.cli.add_command(diary_cli)
