"""CLI application for inspecting runs and listeners on a cluster."""

import typer

from runops.cli.commands.resources import build_kind_app
from runops.core.kinds import KINDS

app = typer.Typer(
    help="runops - inspect pipeline runs, task runs and event listeners",
    no_args_is_help=True,
)

for _kind in KINDS:
    _kind_app = build_kind_app(_kind)
    _canonical, *_aliases = _kind.aliases
    app.add_typer(_kind_app, name=_canonical, help=f"List / describe {_kind.display_plural}.")
    for _alias in _aliases:
        app.add_typer(_kind_app, name=_alias, hidden=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
