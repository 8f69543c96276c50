"""Click classes that accept an ``examples=`` text block.

Any command built with ``examples=`` gains an eager ``--examples`` flag
that prints the block and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds ``--examples`` to a Click command when example text is given."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples.rstrip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class CdnCommand(_ExamplesMixin, click.Command):
    """A leaf command (``upload``, ``domain add``, ...)."""


class CdnGroup(_ExamplesMixin, click.Group):
    """A command group whose subcommands and subgroups accept ``examples=``."""

    command_class = CdnCommand
    group_class = type
