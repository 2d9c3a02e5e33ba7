"""Commands for listing and describing runs and listeners."""

from __future__ import annotations

import typer

from runops._logging import setup_logging
from runops.cli.common.context import AppContext, build_app_context
from runops.cli.common.exits import die, exit_from_exc
from runops.cli.common.options import (
    AllNamespacesOpt,
    ContextOpt,
    DescribeLimitOpt,
    FzfOpt,
    KubeconfigOpt,
    LastOpt,
    ListLimitOpt,
    NamespaceOpt,
    NoHeadersOpt,
    OutputOpt,
)
from runops.cli.common.output import out, render_table
from runops.cli.common.printer import (
    format_list,
    format_object,
    validate_output_format,
)
from runops.core.describe import describe_resource
from runops.core.errors import RunopsError, UnsupportedOutputFormat
from runops.core.kinds import ResourceKind
from runops.core.listing import ListQuery, list_resources, listed_rows
from runops.core.selection import SelectionRequest, SelectionResolver


def _output_or_exit(output: str | None) -> str | None:
    """Validate ``-o`` and convert unknown formats into CLI input errors."""
    try:
        return validate_output_format(output)
    except UnsupportedOutputFormat as exc:
        exit_from_exc(exc, code=2)


def build_kind_app(kind: ResourceKind) -> typer.Typer:
    """Build the `list` / `describe` command group for one resource kind."""
    app = typer.Typer(
        help=f"Inspect {kind.display_plural}.",
        no_args_is_help=True,
    )

    @app.callback()
    def _init(
        ctx: typer.Context,
        kubeconfig: str | None = KubeconfigOpt,
        context: str | None = ContextOpt,
    ):
        """Initialize the Kubernetes context (once per invocation)."""
        setup_logging()
        if ctx.obj is None:
            ctx.obj = build_app_context(kubeconfig, context)

    def list_cmd(
        ctx: typer.Context,
        namespace: str | None = NamespaceOpt,
        all_namespaces: bool = AllNamespacesOpt,
        limit: int | None = ListLimitOpt,
        no_headers: bool = NoHeadersOpt,
        output: str | None = OutputOpt,
    ):
        appctx: AppContext = ctx.obj

        if namespace and all_namespaces:
            die("--namespace and --all-namespaces cannot be used together", code=2)
        fmt = _output_or_exit(output)

        query = ListQuery(
            namespace=appctx.resolve_namespace(namespace),
            all_namespaces=all_namespaces,
            limit=limit,
        )
        try:
            with out.status(f"Loading {kind.display_plural}..."):
                records = list_resources(appctx.adapter, kind, query)
        except RunopsError as exc:
            exit_from_exc(exc, code=1)

        if fmt:
            typer.echo(format_list(kind, [r.raw for r in records], fmt))
            return

        rows = listed_rows(records, appctx.clock())
        typer.echo(
            render_table(
                rows,
                kind,
                no_headers=no_headers,
                all_namespaces=all_namespaces,
            )
        )

    list_cmd.__doc__ = f"List {kind.display_plural}, newest first."

    def describe_cmd(
        ctx: typer.Context,
        name: str | None = typer.Argument(
            None, help=f"Name of the {kind.kind} to describe"
        ),
        namespace: str | None = NamespaceOpt,
        last: bool = LastOpt,
        limit: int | None = DescribeLimitOpt,
        fzf: bool = FzfOpt,
        output: str | None = OutputOpt,
    ):
        appctx: AppContext = ctx.obj
        fmt = _output_or_exit(output)
        ns = appctx.resolve_namespace(namespace)
        settings = appctx.settings

        request = SelectionRequest(
            names=(name,) if name else (),
            last=last,
            limit=settings.describe_limit if limit is None else limit,
            fuzzy=fzf or settings.use_fzf,
        )
        resolver = SelectionResolver(appctx.adapter, kind, ns, appctx.prompt)

        def _print_object(target: str, output_format: str) -> None:
            record = appctx.adapter.get_resource(kind, ns, target)
            typer.echo(format_object(kind, record.raw, output_format))

        def _render_description(target: str) -> None:
            record = appctx.adapter.get_resource(kind, ns, target)
            out.description(kind, record, appctx.clock())

        try:
            describe_resource(
                resolver,
                request,
                output=fmt,
                print_object=_print_object,
                render_description=_render_description,
                notify=out.info,
            )
        except RunopsError as exc:
            exit_from_exc(exc, code=1)

    describe_cmd.__doc__ = (
        f"Describe a {kind.kind}.\n\n"
        f"Without a name, the most recent {kind.display_plural} are offered for "
        "selection (or the last one with --last)."
    )

    app.command("list")(list_cmd)
    app.command("ls", hidden=True)(list_cmd)
    app.command("describe")(describe_cmd)
    app.command("desc", hidden=True)(describe_cmd)

    return app
