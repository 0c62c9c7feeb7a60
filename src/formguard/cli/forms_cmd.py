"""Form definition CLI commands — validate, list and check."""

from pathlib import Path

import click

from formguard.config import FormsConfig
from formguard.definitions.loader import FormLoader
from formguard.definitions.validator import validate_forms_dir, validate_yaml_file
from formguard.engine import FormValidator
from formguard.errors import FormDefinitionError


def _load_forms(forms_path: Path) -> FormLoader:
    if not forms_path.exists():
        click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
        raise SystemExit(1)

    loader = FormLoader(forms_path)
    try:
        loader.load_all()
    except FormDefinitionError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    return loader


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"expected NAME=VALUE, got '{assignment}'", param_hint="--value"
            )
        values[name] = value
    return values


@click.group()
def forms():
    """Form definition commands."""
    pass


@forms.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Validate a single YAML file instead of the whole forms directory.",
)
def validate(strict: bool, target_path: Path | None):
    """Validate form definition files against the JSON Schema."""
    forms_path = FormsConfig.from_env().forms_path

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    if target_path is not None:
        schema_issues = validate_yaml_file(target_path)
        if strict:
            for issue in schema_issues:
                issue.severity = "error"
    else:
        if not forms_path.exists():
            click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
            raise SystemExit(1)
        schema_issues = validate_forms_dir(forms_path, strict=strict)

    errors = [i for i in schema_issues if i.severity == "error"]
    warnings = [i for i in schema_issues if i.severity == "warning"]

    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    # ── Semantic (loader) validation ─────────────────────────────────────────
    try:
        if target_path is not None:
            definitions = [FormLoader(target_path.parent).load_file(target_path)]
        else:
            loader = FormLoader(forms_path)
            loader.load_all()
            definitions = [loader.forms[name] for name in sorted(loader.list_forms())]
    except FormDefinitionError as e:
        click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"\nLoaded {len(definitions)} form(s):")
    for definition in definitions:
        click.echo(f"  ✓ {definition.name} ({len(definition.fields)} fields)")

    click.echo(click.style("\nAll form definitions are valid.", fg="green", bold=True))


@forms.command("list")
def list_cmd():
    """List loaded forms and their fields."""
    loader = _load_forms(FormsConfig.from_env().forms_path)

    names = sorted(loader.list_forms())
    if not names:
        click.echo("No forms defined.")
        return

    for name in names:
        definition = loader.forms[name]
        click.echo(f"{name} — {definition.display_name}")
        for form_field in definition.fields:
            required = " (required)" if form_field.rules.is_required else ""
            click.echo(f"  - {form_field.name}: {form_field.label}{required}")


@forms.command("check")
@click.argument("form_name")
@click.option(
    "--value",
    "-V",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Field value to validate; repeat for several fields.",
)
def check_cmd(form_name: str, assignments: tuple[str, ...]):
    """Run a form's rules against the given values, as on a submit attempt."""
    loader = _load_forms(FormsConfig.from_env().forms_path)

    definition = loader.get_form(form_name)
    if definition is None:
        click.echo(
            f"Error: Unknown form '{form_name}'. "
            f"Available: {', '.join(sorted(loader.list_forms())) or '(none)'}",
            err=True,
        )
        raise SystemExit(1)

    values = _parse_assignments(assignments)
    unknown = sorted(set(values) - {f.name for f in definition.fields})
    if unknown:
        click.echo(
            click.style(f"Warning: ignoring undeclared field(s): {', '.join(unknown)}", fg="yellow"),
            err=True,
        )

    form = FormValidator.from_definition(definition, values)
    is_valid = form.validate_all()

    for name, state in form.fields.items():
        if state.error is None:
            click.echo(click.style(f"  ✓ {name}", fg="green"))
        else:
            click.echo(click.style(f"  ✗ {name}: {state.error}", fg="red"))

    if not is_valid:
        click.echo(click.style(f"\n{form_name} is invalid.", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"\n{form_name} is valid.", fg="green", bold=True))
