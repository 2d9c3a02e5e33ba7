"""Common CLI options for the CLI."""

import typer

KubeconfigOpt = typer.Option(
    None,
    "--kubeconfig",
    "-k",
    help="Path to the kubeconfig file (defaults to $KUBECONFIG or ~/.kube/config)",
)

ContextOpt = typer.Option(
    None,
    "--context",
    "-c",
    help="Name of the kubeconfig context to use",
)

NamespaceOpt = typer.Option(
    None,
    "--namespace",
    "-n",
    help="Namespace to use (defaults to the context namespace)",
)

AllNamespacesOpt = typer.Option(
    False,
    "--all-namespaces",
    "-A",
    help="List resources from all namespaces",
)

NoHeadersOpt = typer.Option(
    False,
    "--no-headers",
    help="Do not print the header row",
)

OutputOpt = typer.Option(
    None,
    "--output",
    "-o",
    help="Output format: json, yaml, name or jsonpath=<template>",
)

ListLimitOpt = typer.Option(
    None,
    "--limit",
    min=1,
    help="Maximum number of resources to request from the cluster",
)

DescribeLimitOpt = typer.Option(
    None,
    "--limit",
    help="Number of recent resources offered when selecting one to describe",
    show_default=False,
)

LastOpt = typer.Option(
    False,
    "--last",
    "-L",
    help="Describe the most recent resource",
)

FzfOpt = typer.Option(
    False,
    "--fzf",
    "-F",
    help="Use a type-to-filter list when selecting a resource to describe",
)
